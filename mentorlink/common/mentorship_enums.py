from enum import Enum


class SelectionStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class DecisionAction(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"


class Availability(str, Enum):
    AVAILABLE = "available"
    LIMITED = "limited"
    UNAVAILABLE = "unavailable"
