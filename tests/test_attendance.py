from datetime import date

from hrdesk.attendance.models import Attendance


def _mark(client, headers, emp_id, day, present):
    return client.post(
        "/api/attendance",
        json={"employee_id": emp_id, "date": day, "present": present},
        headers=headers,
    )


def test_marking_the_same_day_twice_keeps_one_row(client, db, make_employee, admin_headers):
    emp = make_employee()

    first = _mark(client, admin_headers, emp.id, "2024-07-01", True)
    second = _mark(client, admin_headers, emp.id, "2024-07-01", True)

    assert first.status_code == second.status_code == 200
    assert first.json() == {"message": "Attendance marked successfully"}
    assert db.query(Attendance).filter_by(employee_id=emp.id).count() == 1


def test_marking_again_overwrites_present_flag(client, db, make_employee, admin_headers):
    emp = make_employee()
    _mark(client, admin_headers, emp.id, "2024-07-01", True)

    _mark(client, admin_headers, emp.id, "2024-07-01", False)

    db.expire_all()
    row = db.get(Attendance, (emp.id, date(2024, 7, 1)))
    assert row.present is False


def test_mark_requires_all_three_fields(client, make_employee, admin_headers):
    emp = make_employee()

    no_present = client.post("/api/attendance", json={"employee_id": emp.id, "date": "2024-07-01"}, headers=admin_headers)
    no_date = client.post("/api/attendance", json={"employee_id": emp.id, "present": True}, headers=admin_headers)
    no_employee = client.post("/api/attendance", json={"date": "2024-07-01", "present": True}, headers=admin_headers)

    for r in (no_present, no_date, no_employee):
        assert r.status_code == 400
        assert r.json() == {"message": "Employee ID, date, and present status are required"}


def test_absent_is_a_valid_status(client, db, make_employee, admin_headers):
    emp = make_employee()

    r = _mark(client, admin_headers, emp.id, "2024-07-02", False)

    assert r.status_code == 200
    assert db.query(Attendance).filter_by(employee_id=emp.id, present=False).count() == 1


def test_mark_for_unknown_employee_is_404(client, admin_headers):
    r = _mark(client, admin_headers, 404, "2024-07-01", True)

    assert r.status_code == 404


def test_malformed_date_is_rejected(client, make_employee, admin_headers):
    emp = make_employee()

    r = _mark(client, admin_headers, emp.id, "July 1st", True)

    assert r.status_code == 400
    assert r.json()["message"].startswith("Invalid request")


def test_history_is_newest_first(client, make_employee, admin_headers):
    emp = make_employee()
    for day, present in [("2024-07-02", False), ("2024-07-03", True), ("2024-07-01", True)]:
        _mark(client, admin_headers, emp.id, day, present)

    r = client.get(f"/api/attendance/history/{emp.id}", headers=admin_headers)

    assert r.status_code == 200
    assert r.json() == [
        {"date": "2024-07-03", "present": True},
        {"date": "2024-07-02", "present": False},
        {"date": "2024-07-01", "present": True},
    ]


def test_history_for_employee_without_records_is_empty(client, make_employee, admin_headers):
    emp = make_employee()

    r = client.get(f"/api/attendance/history/{emp.id}", headers=admin_headers)

    assert r.json() == []


def test_employee_reads_own_history_only(client, make_employee, admin_headers, employee_auth):
    me = make_employee()
    other = make_employee()
    _mark(client, admin_headers, me.id, "2024-07-01", True)

    mine = client.get(f"/employee/api/attendance/history/{me.id}", headers=employee_auth(me))
    theirs = client.get(f"/employee/api/attendance/history/{other.id}", headers=employee_auth(me))
    as_admin = client.get(f"/employee/api/attendance/history/{other.id}", headers=admin_headers)

    assert mine.status_code == 200
    assert mine.json() == [{"date": "2024-07-01", "present": True}]
    assert theirs.status_code == 403
    assert as_admin.status_code == 200


def test_employee_cannot_mark_attendance(client, make_employee, employee_auth):
    emp = make_employee()

    r = _mark(client, employee_auth(emp), emp.id, "2024-07-01", True)

    assert r.status_code == 403
