import logging
import sys

# 1. Set up a handler and formatter for console output
# Every style_sim.* logger without a handler of its own ends up here.
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(
    logging.DEBUG
)  # The handler should process all messages
formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
console_handler.setFormatter(formatter)

# 2. Attach it to the package logger
# Modules log through logging.getLogger(__name__) and propagate up to it.
package_logger = logging.getLogger(__name__)
package_logger.setLevel(logging.INFO)
package_logger.addHandler(console_handler)
