from flask import Blueprint
from barangay_api.extensions import limiter
from barangay_api.services import OtpService
from barangay_api.utils.responses import json_body, success_response

otp_bp = Blueprint("otp", __name__)


@otp_bp.route("/otp/send", methods=["POST"])
@limiter.limit("5 per 15 minutes")
def send_otp():
    data = json_body()
    result = OtpService.send(data.get("registrationId"))
    return success_response(result, message="OTP sent if phone available")


@otp_bp.route("/otp/resend", methods=["POST"])
@limiter.limit("5 per 15 minutes")
def resend_otp():
    data = json_body()
    result = OtpService.send(data.get("registrationId"), resend=True)
    return success_response(result, message="OTP resent if phone available")


@otp_bp.route("/otp/verify", methods=["POST"])
@limiter.limit("10 per 15 minutes")
def verify_otp():
    data = json_body()
    result = OtpService.verify(data.get("registrationId"), data.get("code"))
    return success_response(result, message="OTP verified successfully")
