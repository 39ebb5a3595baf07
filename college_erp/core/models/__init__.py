from college_erp.core.models.course import Course
from college_erp.core.models.examination import Examination
from college_erp.core.models.hostel import Hostel, Room
from college_erp.core.models.student import ROLL_NUMBER_PATTERN, Student
from college_erp.core.models.admission import Admission
from college_erp.core.models.fee import Fee, FeeInstallment, FeePayment
from college_erp.core.models.hostel_allocation import HostelAllocation
from college_erp.core.models.user import UserAccount

__all__ = [
    "Admission",
    "Course",
    "Examination",
    "Fee",
    "FeeInstallment",
    "FeePayment",
    "Hostel",
    "HostelAllocation",
    "ROLL_NUMBER_PATTERN",
    "Room",
    "Student",
    "UserAccount",
]
