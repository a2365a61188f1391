from __future__ import annotations

import csv
import io

import qrcode
from flask import Flask, send_file, session

from ..common.web import admin_required, current_s_number, login_required, ok, payload, student_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _write_attendance_csv(*, rows, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=["meeting_id", "student_s_number", "student_name", "session_type", "submitted_at"],
        )
        writer.writeheader()
        for row in rows:
            writer.writerow(
                {
                    "meeting_id": row.record.meeting_id,
                    "student_s_number": row.record.student_s_number,
                    "student_name": row.student_name,
                    "session_type": row.record.session_type.value,
                    "submitted_at": row.record.submitted_at.isoformat() if row.record.submitted_at else "",
                }
            )

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    # ===== STUDENT ENDPOINTS =====

    @app.route("/api/meetings/open", methods=["GET"], endpoint="open_meetings")
    @login_required
    def open_meetings():
        return ok(container.meeting_service.list_open_meetings())

    @app.route("/api/meetings/<meeting_id>/attendance", methods=["POST"], endpoint="submit_attendance")
    @student_required
    def submit_attendance(meeting_id: str):
        data = payload()
        record = container.meeting_service.submit_attendance(
            meeting_id=meeting_id,
            student_s_number=current_s_number(),
            supplied_code=data.get("attendance_code", ""),
            session_type=data.get("session_type"),
        )
        return ok(record, 201)

    @app.route("/api/meetings/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        return ok(container.meeting_service.student_history(current_s_number()))

    @app.route("/api/meetings/missed", methods=["GET"], endpoint="missed_meetings")
    @login_required
    def missed_meetings():
        missed = container.meeting_service.missed_meetings(current_s_number())
        return ok(missed, count=len(missed))

    # ===== ADMIN ENDPOINTS =====

    @app.route("/api/admin/meetings", methods=["GET"], endpoint="admin_meetings")
    @admin_required
    def admin_meetings():
        return ok(container.meeting_service.list_meetings())

    @app.route("/api/admin/meetings", methods=["POST"], endpoint="admin_create_meeting")
    @admin_required
    def admin_create_meeting():
        data = payload()
        meeting = container.meeting_service.create_meeting(
            meeting_date=data.get("meeting_date", ""),
            meeting_type=data.get("meeting_type", ""),
            created_by=session.get("name", "admin"),
            attendance_code=data.get("attendance_code"),
            is_open=data.get("is_open", False),
        )
        return ok(meeting, 201)

    @app.route("/api/admin/meetings/<meeting_id>", methods=["PATCH"], endpoint="admin_update_meeting")
    @admin_required
    def admin_update_meeting(meeting_id: str):
        allowed = {"attendance_code", "is_open", "meeting_type", "meeting_date"}
        fields = {k: v for k, v in payload().items() if k in allowed}
        return ok(container.meeting_service.update_meeting(meeting_id, **fields))

    @app.route("/api/admin/meetings/<meeting_id>/open", methods=["POST"], endpoint="admin_open_meeting")
    @admin_required
    def admin_open_meeting(meeting_id: str):
        return ok(container.meeting_service.open_meeting(meeting_id))

    @app.route("/api/admin/meetings/<meeting_id>/close", methods=["POST"], endpoint="admin_close_meeting")
    @admin_required
    def admin_close_meeting(meeting_id: str):
        return ok(container.meeting_service.close_meeting(meeting_id))

    @app.route("/api/admin/meetings/<meeting_id>/code", methods=["POST"], endpoint="admin_regenerate_code")
    @admin_required
    def admin_regenerate_code(meeting_id: str):
        return ok(container.meeting_service.regenerate_code(meeting_id))

    @app.route("/api/admin/meetings/<meeting_id>", methods=["DELETE"], endpoint="admin_delete_meeting")
    @admin_required
    def admin_delete_meeting(meeting_id: str):
        container.meeting_service.delete_meeting(meeting_id)
        return ok()

    @app.route("/api/admin/meetings/<meeting_id>/attendance", methods=["GET"], endpoint="admin_meeting_attendance")
    @admin_required
    def admin_meeting_attendance(meeting_id: str):
        return ok(container.meeting_service.meeting_attendance(meeting_id))

    @app.route("/api/admin/meetings/<meeting_id>/attendance.csv", methods=["GET"], endpoint="admin_meeting_attendance_csv")
    @admin_required
    def admin_meeting_attendance_csv(meeting_id: str):
        meeting = container.meeting_service.get_meeting(meeting_id)
        rows = container.meeting_service.meeting_attendance(meeting.meeting_id)
        stamp = meeting.meeting_date.strftime("%Y%m%d") if meeting.meeting_date else meeting.meeting_id
        return _write_attendance_csv(rows=rows, filename=f"attendance_{stamp}_{meeting.meeting_type.value}.csv")

    @app.route("/api/admin/meetings/<meeting_id>/qr", methods=["GET"], endpoint="admin_meeting_qr")
    @admin_required
    def admin_meeting_qr(meeting_id: str):
        """Attendance code as a PNG QR code, for projecting at the meeting."""

        meeting = container.meeting_service.get_meeting(meeting_id)

        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=2,
        )
        qr.add_data(meeting.attendance_code)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        buf.seek(0)
        return send_file(buf, mimetype="image/png")
