"""
Tests for the pyunifac logging handlers.
"""

import logging
import os
import random

import pyunifac

logger = logging.getLogger("pyunifac.tests")


def test_pyunifac_log_file(tmp_path):
  fname = str(tmp_path / "pyunifac_{}.log".format(random.randint(1, 10)))
  pyunifac.initiate_logger(log_file=fname, verbose=10)
  logger.info("test")
  flag = os.path.isfile(fname)
  pyunifac.initiate_logger(log_file=False)
  assert flag


def test_pyunifac_log_console(capsys):
  pyunifac.initiate_logger(console=True, verbose=10)
  logger.info("test")
  _, err = capsys.readouterr()
  pyunifac.initiate_logger(console=False)
  assert "[INFO](pyunifac.tests): test" in err


def test_debug_reports_mixture(capsys):
  pyunifac.initiate_logger(console=True, verbose=10)
  pyunifac.activity_coefficients([{17: 1}, {1: 1, 2: 1, 15: 1}], [0.5, 0.5], 300.)
  _, err = capsys.readouterr()
  pyunifac.initiate_logger(console=False, verbose=30)
  assert "[DEBUG](pyunifac.models.unifac): UNIFAC mixture of 2 molecules" in err
