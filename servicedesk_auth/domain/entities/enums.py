"""
Service Desk Auth Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Platform role assigned to a user"""

    admin = "admin"
    employee = "employee"
    client = "client"


class UserStatus(str, Enum):
    """User account lifecycle status"""

    pending = "pending"
    verified = "verified"
    active = "active"
    suspended = "suspended"
    anonymized = "anonymized"
