from barangay_api.repositories.user_repository import UserRepository
from barangay_api.repositories.profile_repository import ProfileRepository
from barangay_api.repositories.event_repository import EventRepository
from barangay_api.repositories.custom_field_repository import CustomFieldRepository
from barangay_api.repositories.registration_repository import RegistrationRepository
from barangay_api.repositories.otp_repository import OtpRepository
from barangay_api.repositories.qr_code_repository import QrCodeRepository
from barangay_api.repositories.attendance_repository import AttendanceRepository
from barangay_api.repositories.revoked_token_repository import RevokedTokenRepository
