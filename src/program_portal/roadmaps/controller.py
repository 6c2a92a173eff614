from __future__ import annotations

from flask import Flask

from ..common.web import current_role, dump, handle_errors, json_body, login_required, ok, roles_required
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def _week_row(service, week) -> dict:
    row = dump(week)
    progress = service.week_progress(week)
    row["progress"] = {"completed": progress.completed, "total": progress.total, "percent": progress.percent}
    return row


def register(app: Flask, container: Container) -> None:
    service = container.roadmap_service
    planners = (Role.FACILITATOR, Role.PROGRAM_MANAGER, Role.SUPER_ADMIN)

    @app.route("/roadmaps", methods=["POST"], endpoint="create_week")
    @roles_required(*planners)
    @handle_errors("Failed to create weekly plan")
    def create_week():
        data = json_body()
        week = service.create_week(
            current_role=current_role(),
            program_id=data.get("program") or data.get("programId"),
            week_number=data.get("weekNumber"),
            title=data.get("title"),
            start_date=data.get("startDate"),
            objectives=data.get("objectives"),
            topics=data.get("topics"),
        )
        return ok("Weekly plan created successfully", 201, week=_week_row(service, week))

    @app.route("/roadmaps/program/<program_id>", methods=["GET"], endpoint="program_roadmap")
    @login_required
    @handle_errors("Failed to load roadmap")
    def program_roadmap(program_id: str):
        weeks = service.program_roadmap(program_id)
        overall = service.overall_progress(weeks)
        return ok(
            weeks=[_week_row(service, w) for w in weeks],
            progress={"completed": overall.completed, "total": overall.total, "percent": overall.percent},
        )

    @app.route("/roadmaps/week/<week_id>", methods=["GET"], endpoint="roadmap_week")
    @login_required
    @handle_errors("Failed to load week")
    def roadmap_week(week_id: str):
        return ok(week=_week_row(service, service.get_week(week_id)))

    @app.route("/roadmaps/week/<week_id>", methods=["PATCH"], endpoint="update_week")
    @roles_required(*planners)
    @handle_errors("Failed to update week")
    def update_week(week_id: str):
        data = json_body()
        week = service.update_week(
            current_role=current_role(),
            week_id=week_id,
            title=data.get("title"),
            objectives=data.get("objectives"),
            topics=data.get("topics"),
            start_date=data.get("startDate"),
        )
        return ok("Week updated", week=_week_row(service, week))

    @app.route("/roadmaps/week/<week_id>", methods=["DELETE"], endpoint="delete_week")
    @roles_required(*planners)
    @handle_errors("Failed to delete week")
    def delete_week(week_id: str):
        service.delete_week(current_role=current_role(), week_id=week_id)
        return ok("Week deleted")

    @app.route("/roadmaps/week/<week_id>/topics/<int:topic_index>", methods=["PATCH"], endpoint="toggle_topic")
    @roles_required(*planners)
    @handle_errors("Failed to update topic")
    def toggle_topic(week_id: str, topic_index: int):
        completed = json_body().get("completed")
        if not isinstance(completed, bool):
            raise ValidationError("completed must be true or false")
        week = service.set_topic_completed(week=service.get_week(week_id), topic_index=topic_index, completed=completed)
        return ok("Topic updated", week=_week_row(service, week))

    @app.route("/roadmaps/week/<week_id>/submit", methods=["POST"], endpoint="submit_week")
    @roles_required(*planners)
    @handle_errors("Failed to submit week")
    def submit_week(week_id: str):
        week = service.submit_week(current_role=current_role(), week_id=week_id)
        return ok("Week submitted for approval", week=_week_row(service, week))

    @app.route("/roadmaps/week/<week_id>/review", methods=["POST"], endpoint="review_week")
    @roles_required(Role.PROGRAM_MANAGER, Role.SUPER_ADMIN)
    @handle_errors("Failed to review week")
    def review_week(week_id: str):
        data = json_body()
        week = service.review_week(
            current_role=current_role(),
            week_id=week_id,
            action=data.get("action"),
            feedback=data.get("feedback"),
        )
        message = "Week approved" if (data.get("action") or "").lower() == "approve" else "Week rejected"
        return ok(message, week=_week_row(service, week))
