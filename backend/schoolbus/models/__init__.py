from .User import User, TokenBlocklist
from .Student import Student
from .AttendanceRecord import AttendanceRecord
from .Device import DeviceStatus
from .base import TimestampMixin, RoleEnum, AttendanceTypeEnum
