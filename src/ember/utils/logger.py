"""Package-wide logger.

Every module logs through the `ember` logger. Only the message is printed:
rejected space points are reported at the DEBUG level, data quality issues
at the WARNING level and missing inputs at the ERROR level.
"""

import logging
import sys

# Print the bare message on the standard output
logging.basicConfig(format="%(message)s", stream=sys.stdout)

# Route `warnings.warn` calls through the logging system
logging.captureWarnings(True)

logger = logging.getLogger("ember")
