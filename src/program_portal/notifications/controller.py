from __future__ import annotations

from flask import Flask

from ..common.web import arg_int, current_role, dump, handle_errors, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.notification_service

    @app.route("/notifications", methods=["GET"], endpoint="notifications")
    @login_required
    @handle_errors("Failed to load notifications")
    def notifications():
        page = service.page(arg_int("page", 1))
        return ok(
            notifications=dump(page.items),
            unreadCount=page.unread_count,
            page=page.page,
            totalPages=page.total_pages,
        )

    @app.route("/notifications/mark-all-read", methods=["POST"], endpoint="mark_all_notifications_read")
    @login_required
    @handle_errors("Failed to update notifications")
    def mark_all_notifications_read():
        return ok("All notifications marked as read", unreadCount=service.mark_all_read())

    @app.route("/notifications/<notification_id>/toggle-read", methods=["PATCH"], endpoint="toggle_notification")
    @login_required
    @handle_errors("Failed to update notification")
    def toggle_notification(notification_id: str):
        is_read = json_body().get("isRead")
        notification, unread = service.toggle_read(
            notification_id, is_read=is_read if isinstance(is_read, bool) else None
        )
        return ok(notification=dump(notification), unreadCount=unread)

    @app.route("/notifications/<notification_id>", methods=["DELETE"], endpoint="delete_notification")
    @login_required
    @handle_errors("Failed to delete notification")
    def delete_notification(notification_id: str):
        return ok("Notification deleted", unreadCount=service.delete(notification_id))

    @app.route("/counts", methods=["GET"], endpoint="sidebar_counts")
    @login_required
    @handle_errors("Failed to load counts")
    def sidebar_counts():
        return ok(counts=dump(container.counts_service.counts_for(current_role())))
