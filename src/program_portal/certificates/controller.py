from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.web import current_role, dump, handle_errors, json_body, login_required, ok, roles_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.certificate_service
    issuers = (Role.SUPER_ADMIN, Role.PROGRAM_MANAGER)

    @app.route("/certificates", methods=["GET"], endpoint="certificates")
    @login_required
    @handle_errors("Failed to load certificates")
    def certificates():
        rows = service.list_certificates(current_role=current_role(), term=request.args.get("q"))
        return ok(certificates=dump(rows))

    @app.route("/certificates/templates", methods=["GET"], endpoint="certificate_templates")
    @roles_required(*issuers)
    @handle_errors("Failed to load templates")
    def certificate_templates():
        return ok(templates=dump(service.list_templates()))

    @app.route("/certificates/templates", methods=["POST"], endpoint="create_certificate_template")
    @roles_required(*issuers)
    @handle_errors("Failed to create template")
    def create_certificate_template():
        data = json_body()
        template = service.create_template(
            current_role=current_role(),
            name=data.get("name"),
            description=data.get("description"),
            style=data.get("style"),
            color_scheme=data.get("colorScheme"),
            html_content=data.get("htmlContent"),
            is_default=data.get("isDefault"),
        )
        return ok("Template created", 201, template=dump(template))

    @app.route("/certificates/templates/<template_id>", methods=["PATCH"], endpoint="update_certificate_template")
    @roles_required(*issuers)
    @handle_errors("Failed to update template")
    def update_certificate_template(template_id: str):
        data = json_body()
        template = service.update_template(
            current_role=current_role(),
            template_id=template_id,
            name=data.get("name"),
            description=data.get("description"),
            style=data.get("style"),
            color_scheme=data.get("colorScheme"),
            html_content=data.get("htmlContent"),
            is_default=data.get("isDefault"),
        )
        return ok("Template updated", template=dump(template))

    @app.route("/certificates/templates/<template_id>", methods=["DELETE"], endpoint="delete_certificate_template")
    @roles_required(*issuers)
    @handle_errors("Failed to delete template")
    def delete_certificate_template(template_id: str):
        service.delete_template(current_role=current_role(), template_id=template_id)
        return ok("Template deleted")

    @app.route("/certificates/eligible", methods=["GET"], endpoint="eligible_trainees")
    @roles_required(*issuers)
    @handle_errors("Failed to load eligible trainees")
    def eligible_trainees():
        only = request.args.get("only") == "eligible"
        return ok(trainees=dump(service.eligible_trainees(current_role=current_role(), only_eligible=only)))

    @app.route("/certificates/issue", methods=["POST"], endpoint="issue_certificates")
    @roles_required(*issuers)
    @handle_errors("Failed to issue certificates")
    def issue_certificates():
        items = json_body().get("trainees") or []
        pairs = [(i.get("traineeId"), i.get("programId")) for i in items if isinstance(i, dict)]
        result = service.issue_batch(current_role=current_role(), trainees=pairs)
        return ok(result.summary, issued=result.issued, failed=result.failed, outcomes=dump(result.outcomes))

    @app.route("/certificates/<certificate_id>/download", methods=["GET"], endpoint="download_certificate")
    @login_required
    @handle_errors("Failed to download certificate")
    def download_certificate(certificate_id: str):
        pdf = service.download(certificate_id)
        return send_file(
            io.BytesIO(pdf),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=f"certificate-{certificate_id}.pdf",
        )

    @app.route("/certificates/<certificate_id>/resend", methods=["POST"], endpoint="resend_certificate")
    @roles_required(*issuers)
    @handle_errors("Failed to resend notification")
    def resend_certificate(certificate_id: str):
        service.resend_notification(current_role=current_role(), certificate_id=certificate_id)
        return ok("Notification sent")
