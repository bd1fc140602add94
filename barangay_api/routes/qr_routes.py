import os
from flask import Blueprint, send_file
from barangay_api.models.enums import UserRole
from barangay_api.services import QrService
from barangay_api.utils.auth import roles_required
from barangay_api.utils.responses import json_body, success_response

qr_bp = Blueprint("qr", __name__)


@qr_bp.route("/qr/generate", methods=["POST"])
@roles_required(UserRole.SUPER_ADMIN, UserRole.EVENT_MANAGER)
def generate_qr():
    data = json_body()
    result = QrService.issue(data.get("registrationId"))
    return success_response(result, status_code=201)


@qr_bp.route("/qr/scan", methods=["POST"])
@roles_required(UserRole.SUPER_ADMIN, UserRole.EVENT_MANAGER, UserRole.STAFF)
def scan_qr():
    data = json_body()
    result = QrService.resolve(data.get("qrValue"))
    return success_response(result)


@qr_bp.route("/qr/download/<string:qr_id>", methods=["GET"])
@roles_required(UserRole.SUPER_ADMIN, UserRole.EVENT_MANAGER)
def download_qr_image(qr_id):
    path = QrService.image_path(qr_id)
    return send_file(
        path,
        mimetype="image/png",
        as_attachment=True,
        download_name=os.path.basename(path),
    )
