from enum import Enum


class UserRole(str, Enum):
    MENTOR = "mentor"
    MENTEE = "mentee"
