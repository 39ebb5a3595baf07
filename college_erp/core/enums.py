from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"
    STUDENT = "student"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class StudentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    GRADUATED = "graduated"
    SUSPENDED = "suspended"


class AdmissionStatus(str, Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    APPROVED = "approved"
    REJECTED = "rejected"
    CONFIRMED = "confirmed"


class FeeType(str, Enum):
    TUITION = "tuition"
    HOSTEL = "hostel"
    LIBRARY = "library"
    LABORATORY = "laboratory"
    EXAMINATION = "examination"
    DEVELOPMENT = "development"
    MISCELLANEOUS = "miscellaneous"


class FeeStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    PARTIAL = "partial"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    UPI = "upi"
    CHECK = "check"


class LateFeePolicyKind(str, Enum):
    FLAT = "flat"
    PERCENTAGE = "percentage"


class HostelType(str, Enum):
    BOYS = "boys"
    GIRLS = "girls"
    MIXED = "mixed"


class RoomType(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    DORMITORY = "dormitory"


class AllocationStatus(str, Enum):
    ALLOCATED = "allocated"
    VACATED = "vacated"
    SUSPENDED = "suspended"


class ExamType(str, Enum):
    INTERNAL = "internal"
    SEMESTER = "semester"
    ANNUAL = "annual"
    SUPPLEMENTARY = "supplementary"


class ExamStatus(str, Enum):
    SCHEDULED = "scheduled"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
