from program_portal.attendance.factory import AttendanceStrategyFactory
from program_portal.attendance.model import ClassSession
from program_portal.attendance.strategies.geolocation_strategy import GeolocationStrategy
from program_portal.attendance.strategies.manual_strategy import ManualStrategy
from program_portal.attendance.strategies.qr_strategy import QRCodeStrategy
from program_portal.core.enums import AttendanceMethod, SessionType


def _session(kind: str) -> ClassSession:
    return ClassSession.from_api({"_id": "s1", "sessionId": "S-1", "type": kind, "status": "active", "title": "Intro"})


def test_online_session_uses_qr_code():
    strategy = AttendanceStrategyFactory().for_session(session=_session("online"))

    assert isinstance(strategy, QRCodeStrategy)


def test_physical_session_uses_geolocation():
    strategy = AttendanceStrategyFactory().for_session(session=_session("physical"))

    assert isinstance(strategy, GeolocationStrategy)


def test_session_type_without_session():
    strategy = AttendanceStrategyFactory().for_session(session_type=SessionType.PHYSICAL)

    assert isinstance(strategy, GeolocationStrategy)


def test_requested_method_wins_over_session_type():
    strategy = AttendanceStrategyFactory().for_session(session=_session("online"), requested=AttendanceMethod.MANUAL)

    assert isinstance(strategy, ManualStrategy)


def test_nothing_known_defaults_to_qr_code():
    assert isinstance(AttendanceStrategyFactory().for_session(), QRCodeStrategy)
