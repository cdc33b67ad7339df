from enum import StrEnum


class UserRole(StrEnum):
    AGENCY_ADMIN = 'agency_admin'
    SALES_AGENT = 'sales_agent'
