"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Length of one token slot (W). Generator and validator must agree on it.
QR_VALIDITY_SECONDS = 30
# A payload older than this many slots is rejected before the token is compared.
QR_MAX_AGE_SLOTS = 2
# Display redraw cadence, must stay below QR_VALIDITY_SECONDS.
QR_REDRAW_SECONDS = 10

DEFAULT_GRACE_PERIOD_MINUTES = 15
DEFAULT_DB_CONNECT_TIMEOUT = 5

STUDENT_SESSION_KEY = "student_session"
SCAN_TICKET_KEY = "scan_ticket"
# How long a scanned ticket stays confirmable after /scan inspected it.
SCAN_TICKET_MAX_AGE_SECONDS = 120
