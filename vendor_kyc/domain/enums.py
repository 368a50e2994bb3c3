"""Closed value sets shared by the ORM models, schemas and services."""

from enum import Enum


class VendorStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class BusinessCategory(str, Enum):
    MANUFACTURING = "Manufacturing"
    SERVICES = "Services"
    TRADING = "Trading"
    IT_SOFTWARE = "IT/Software"
    CONSTRUCTION = "Construction"
    AGRICULTURE = "Agriculture"
    RETAIL = "Retail"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    OTHER = "Other"


class DocumentType(str, Enum):
    TAX_ID = "GST"
    NATIONAL_ID = "PAN"
    REGISTRATION_CERTIFICATE = "Registration Certificate"
    OTHER = "Other"
