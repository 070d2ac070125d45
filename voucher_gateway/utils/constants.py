"""
Constants Module
Application-wide constants
"""

# Application Info
APP_NAME = "Voucher Gateway"
APP_VERSION = "1.0.0"

# Form field the backend reads to treat a POST as another verb
METHOD_OVERRIDE_FIELD = "_method"

# Appended to a signature slot name to request removal
CLEARED_SUFFIX = "_cleared"

# Filter value meaning "no filter" in list screens
FILTER_ALL = "all"

# Backend paths for voucher numbering
CASH_LATEST_NUMBER_PATH = "/cash-vouchers/latest"
CHEQUE_NEXT_NUMBER_PATH = "/cheque-vouchers/next-voucher-number"


# Error Codes
class ErrorCode:
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    BACKEND_UNREACHABLE = "BACKEND_UNREACHABLE"
    BACKEND_ERROR = "BACKEND_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNEXPECTED_RESPONSE_FORMAT = "UNEXPECTED_RESPONSE_FORMAT"
    INVALID_REQUEST = "INVALID_REQUEST"
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"
    CONFIG_UPDATES_DISABLED = "CONFIG_UPDATES_DISABLED"


# Voucher Status
class VoucherStatus:
    PENDING = "pending"
    APPROVED = "approved"
    CANCELLED = "cancelled"
    REJECTED = "rejected"
    COMPLETED = "completed"


# Health Status
class HealthStatus:
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"
