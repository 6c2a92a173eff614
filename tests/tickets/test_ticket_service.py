from __future__ import annotations

import pytest

from program_portal.core.enums import Role, TicketPriority, TicketStatus
from program_portal.core.exceptions import AuthorizationError, ValidationError
from program_portal.tickets.model import Ticket
from program_portal.tickets.rest_ticket_repository import RestTicketRepository
from program_portal.tickets.service import TicketService


class InMemoryTickets:
    def __init__(self, tickets=()):
        self.tickets = list(tickets)
        self.calls: list[tuple] = []

    def list_all(self):
        self.calls.append(("list_all",))
        return list(self.tickets)

    def create(self, payload):
        self.calls.append(("create", payload))
        return Ticket.from_api({"_id": "new", **payload})

    def update(self, ticket_id, payload):
        self.calls.append(("update", ticket_id, payload))
        return Ticket.from_api({"_id": ticket_id, **payload})

    def add_comment(self, ticket_id, *, message):
        self.calls.append(("add_comment", ticket_id, message))
        return Ticket.from_api({"_id": ticket_id, "comments": [{"message": message}]})


def _ticket(tid, status="Open", priority="Medium", title="Printer jam"):
    return Ticket.from_api({"_id": tid, "title": title, "status": status, "priority": priority})


def test_create_ticket_defaults_priority_to_medium():
    repo = InMemoryTickets()

    ticket = TicketService(repo).create_ticket(title="No wifi", description="Room 4", category="Network")

    assert repo.calls == [
        ("create", {"title": "No wifi", "description": "Room 4", "category": "Network", "priority": "Medium"})
    ]
    assert ticket.priority == TicketPriority.MEDIUM


@pytest.mark.parametrize(
    "overrides",
    [{"title": " "}, {"description": ""}, {"category": "Plumbing"}, {"category": None}, {"priority": "Urgent"}],
)
def test_invalid_ticket_is_rejected_locally(overrides):
    repo = InMemoryTickets()
    form = {"title": "No wifi", "description": "Room 4", "category": "Network", "priority": None, **overrides}

    with pytest.raises(ValidationError):
        TicketService(repo).create_ticket(**form)

    assert repo.calls == []


@pytest.mark.parametrize("role", [Role.TRAINEE, Role.FACILITATOR, Role.PROGRAM_MANAGER])
def test_only_support_staff_update_tickets(role):
    with pytest.raises(AuthorizationError):
        TicketService(InMemoryTickets()).update_ticket(current_role=role, ticket_id="t1", status="Closed")


def test_resolving_needs_a_resolution_note():
    repo = InMemoryTickets()
    service = TicketService(repo)

    with pytest.raises(ValidationError):
        service.update_ticket(current_role=Role.IT_SUPPORT, ticket_id="t1", status="Resolved")
    ticket = service.update_ticket(
        current_role=Role.IT_SUPPORT, ticket_id="t1", status="Resolved", resolution="Replaced the cable"
    )

    assert ticket.status == TicketStatus.RESOLVED
    assert repo.calls == [("update", "t1", {"status": "Resolved", "resolution": "Replaced the cable"})]


def test_empty_comment_sends_nothing():
    repo = InMemoryTickets()

    with pytest.raises(ValidationError):
        TicketService(repo).add_comment(ticket_id="t1", message="   ")

    assert repo.calls == []


def test_narrow_and_stats_work_on_fetched_tickets():
    repo = InMemoryTickets(
        [
            _ticket("t1", "Open", "Critical", title="Server room alarm"),
            _ticket("t2", "Open", "Low"),
            _ticket("t3", "Closed", "Critical"),
        ]
    )
    service = TicketService(repo)
    fetched = service.list_tickets()

    assert [t.ticket_id for t in service.narrow(fetched, status="Open")] == ["t1", "t2"]
    assert [t.ticket_id for t in service.narrow(fetched, priority="Critical")] == ["t1", "t3"]
    assert [t.ticket_id for t in service.narrow(fetched, term="alarm")] == ["t1"]
    assert service.stats(fetched)["urgent"] == 1
    assert repo.calls == [("list_all",)]


def test_rest_ticket_parses_populated_people_and_comments(conn, http):
    http.route(
        "GET",
        "/tickets",
        data=[
            {
                "_id": "t1",
                "title": "Laptop",
                "category": "Hardware",
                "status": "In Progress",
                "createdBy": {"_id": "u1", "name": "Ann"},
                "comments": [{"author": {"_id": "u9", "name": "Sam"}, "message": "On it"}],
            }
        ],
    )

    (ticket,) = RestTicketRepository(conn).list_all()

    assert ticket.status == TicketStatus.IN_PROGRESS
    assert ticket.created_by_name == "Ann"
    assert ticket.assigned_to_name == "Unassigned"
    assert ticket.comments[0].author_name == "Sam"


def test_rest_comment_posts_message(conn, http):
    http.route("POST", "/tickets/t1/comments", data={"_id": "t1", "comments": [{"message": "Any update?"}]})

    RestTicketRepository(conn).add_comment("t1", message="Any update?")

    assert http.calls_to("POST", "/tickets/t1/comments")[0]["json"] == {"message": "Any update?"}


def test_ticket_update_route_is_support_only(sign_in, http):
    client = sign_in("Trainee")

    resp = client.patch("/tickets/t1", json={"status": "Closed"})

    assert resp.status_code == 403
    assert http.calls == []


def test_ticket_list_route_filters_without_refetching(sign_in, http):
    http.route(
        "GET",
        "/tickets",
        data=[{"_id": "t1", "status": "Open"}, {"_id": "t2", "status": "Closed"}],
    )
    client = sign_in("it_support")

    body = client.get("/tickets?status=Closed").get_json()

    assert [t["ticket_id"] for t in body["tickets"]] == ["t2"]
    assert body["stats"]["total"] == 2
    assert len(http.calls_to("GET", "/tickets")) == 1
