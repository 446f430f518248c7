"""
Application-wide constants for air monitoring sample rules.

This module defines default thresholds and fixed vocabulary used throughout the application.
"""

# Equipment types as recorded in the equipment registry
AIR_PUMP = "Air pump"
SITE_FLOWMETER = "Site flowmeter"

# Manual equipment status that takes equipment out of use
MANUAL_OUT_OF_SERVICE = "out-of-service"

# Derived equipment statuses
STATUS_ACTIVE = "Active"
STATUS_CALIBRATION_OVERDUE = "Calibration Overdue"
STATUS_OUT_OF_SERVICE = "Out-of-Service"

# Window in which a pump must have a passed calibration test
CALIBRATION_FREQUENCY_DAYS = 365

# Calibration test results are recorded in mL/min, samples in L/min
ML_PER_LITRE = 1000.0

# Filter sizes
FILTER_13MM = "13mm"
FILTER_25MM = "25mm"

# 13mm filters may only be run at this flow rate (L/min)
THIRTEEN_MM_FLOWRATE = 1.5
FLOWRATE_EPSILON = 0.01

# Minimum collected volume (litres) per filter size
DEFAULT_MIN_VOLUME_25MM = 360.0
DEFAULT_MIN_VOLUME_13MM = 72.0

# Allowed drift between initial and final flow rate, fraction of initial
DEFAULT_DRIFT_TOLERANCE = 0.10

MINUTES_PER_DAY = 24 * 60

# Sample statuses derived on the client
SAMPLE_PENDING = "pending"
SAMPLE_FAILED = "failed"

# Sample categories
FIELD_BLANK_LOCATION = "Field blank"
NEG_AIR_EXHAUST_LOCATION = "Neg air exhaust"
FIELD_BLANK_TYPE = "-"
DEFAULT_SAMPLE_TYPE = "Background"
SAMPLE_TYPES = ("Background", "Clearance", "Exposure")

# Sample numbering
SAMPLE_NUMBER_PREFIX = "AM"
COWL_PREFIX = "C"

# Page size used when loading a pump's full calibration history
CALIBRATION_PAGE_LIMIT = 1000
EQUIPMENT_PAGE_LIMIT = 300
