from barangay_api.models.user import User
from barangay_api.models.profile import Profile
from barangay_api.models.event import Event
from barangay_api.models.custom_field import CustomField
from barangay_api.models.registration import Registration
from barangay_api.models.otp_request import OtpRequest
from barangay_api.models.qr_code import QrCode
from barangay_api.models.attendance import Attendance
from barangay_api.models.revoked_token import RevokedToken
from barangay_api.models.enums import RegistrationStatus, UserRole
