from barangay_api.services.user_service import UserService
from barangay_api.services.event_service import EventService
from barangay_api.services.custom_field_service import CustomFieldService
from barangay_api.services.qr_service import QrService
from barangay_api.services.otp_service import OtpService
from barangay_api.services.registration_service import RegistrationService
