from __future__ import annotations

from flask import Flask, request

from ..common.web import current_role, dump, handle_errors, json_body, ok, roles_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.submission_service

    @app.route("/submissions", methods=["POST"], endpoint="submit_project")
    @roles_required(Role.TRAINEE)
    @handle_errors("Failed to submit project")
    def submit_project():
        upload = request.files.get("projectFile")
        submission = service.submit(
            current_role=current_role(),
            assignment_id=request.form.get("assignmentId"),
            filename=upload.filename if upload else None,
            document=upload.stream if upload else None,
        )
        return ok("Project submitted successfully", 201, submission=dump(submission))

    @app.route("/submissions/mine", methods=["GET"], endpoint="my_submissions")
    @roles_required(Role.TRAINEE)
    @handle_errors("Failed to load submissions")
    def my_submissions():
        return ok(submissions=dump(service.my_submissions(status=request.args.get("status"))))

    @app.route("/submissions/reviews", methods=["GET"], endpoint="submissions_to_review")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to load submissions")
    def submissions_to_review():
        fetched = service.to_review(current_role=current_role())
        rows = service.narrow(fetched, status=request.args.get("status"), term=request.args.get("q"))
        return ok(submissions=dump(rows), stats=service.stats(fetched))

    @app.route("/submissions/<submission_id>/review", methods=["PATCH"], endpoint="review_submission")
    @roles_required(Role.FACILITATOR)
    @handle_errors("Failed to review submission")
    def review_submission(submission_id: str):
        data = json_body()
        submission = service.review(
            current_role=current_role(),
            submission_id=submission_id,
            status=data.get("status"),
            feedback=data.get("feedback"),
            grade=data.get("grade"),
        )
        return ok("Submission reviewed", submission=dump(submission))
