from homecare.models.user import User
from homecare.models.nurse import Nurse
from homecare.models.patient import Patient
from homecare.models.service_request import ServiceRequest
from homecare.models.transaction import Transaction
from homecare.models.message import Message
from homecare.models.support import FAQ, SupportRequest

__all__ = ["User", "Nurse", "Patient", "ServiceRequest", "Transaction", "Message",
           "FAQ", "SupportRequest"]
