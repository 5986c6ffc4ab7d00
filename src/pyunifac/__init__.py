""" PYUNIFAC: UNIFAC GROUP-CONTRIBUTION ACTIVITY COEFFICIENTS """

import logging
import logging.handlers
import os

from .models import UNIFAC, activity_coefficients, MOLE_FRACTION_TOL
from .models.unifac_subgroups import UFSG, UFIP, UNIFAC_subgroup, interaction_parameter
from .exceptions import UNIFACError, InvalidTemperatureError, InvalidCompositionError, MissingInteractionDataError

__version__ = "0.0.1"

__all__ = [
	"activity_coefficients", "UNIFAC", "MOLE_FRACTION_TOL",
	"UFSG", "UFIP", "UNIFAC_subgroup", "interaction_parameter",
	"UNIFACError", "InvalidTemperatureError", "InvalidCompositionError", "MissingInteractionDataError",
	"initiate_logger",
]

logger = logging.getLogger(__name__)
logger.setLevel(30)


def initiate_logger(console=None, log_file=None, verbose=30):
  r"""
  Initiate a logging handler if more detail on the calculations is desired.

  If a handler of the given type is already present, nothing is done. If either handler is given a value of False, the handler of that type is removed.

  :param console: if True, add a stream handler printing to the console; if False, remove it
  :type console: bool, optional
  :param log_file: if True or a file name, record log output in a file (``pyunifac.log`` when True); if False, remove the file handler. An existing file with the same name is deleted.
  :type log_file: bool or str, optional
  :param verbose: logging level
  :type verbose: int, optional
  """
  logger.setLevel(verbose)

  # check for existing handlers
  handler_console = None
  handler_logfile = None
  for tmp in logger.handlers:
    if isinstance(tmp, logging.handlers.RotatingFileHandler):
      handler_logfile = tmp
    elif isinstance(tmp, logging.StreamHandler):
      handler_console = tmp

  # set up logging to console
  if console and handler_console is None:
    console_handler = logging.StreamHandler()  # sys.stderr
    console_handler.setFormatter(logging.Formatter("[%(levelname)s](%(name)s): %(message)s"))
    console_handler.setLevel(verbose)
    logger.addHandler(console_handler)
  elif console:
    logger.warning("StreamHandler already exists")
  elif console is False and handler_console is not None:
    handler_console.close()
    logger.removeHandler(handler_console)

  # rotating file handler
  if log_file and handler_logfile is None:
    if type(log_file) != str:
      log_file = "pyunifac.log"
    if os.path.isfile(log_file):
      os.remove(log_file)
    log_file_handler = logging.handlers.RotatingFileHandler(log_file)
    log_file_handler.setFormatter(
      logging.Formatter("%(asctime)s [%(levelname)s](%(name)s:%(funcName)s:%(lineno)d): %(message)s")
    )
    log_file_handler.setLevel(verbose)
    logger.addHandler(log_file_handler)
  elif log_file:
    logger.warning("RotatingFileHandler already exists")
  elif log_file is False and handler_logfile is not None:
    handler_logfile.close()
    logger.removeHandler(handler_logfile)
