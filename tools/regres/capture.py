# Copyright 2026 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.
"""Captures a workload trace with gapit and extracts its statistics."""

import collections
import logging
import os
import re
import sys
import tempfile

from regres import artifacts
from regres import process_util

TRACE_DURATION = '60s'
TRACE_FILE_NAME = 'gapid-regres.gfxtrace'

# E.g.: Frames:   120
_RE_STAT = re.compile(r'([a-zA-Z]+):\s+([0-9]+)')

# Counters that do not fit in an int64 are skipped.
_MAX_STAT = 2**63 - 1

CaptureStats = collections.namedtuple('CaptureStats',
                                      ['frames', 'draws', 'commands'],
                                      defaults=(0, 0, 0))

# Maps the counter names printed by `gapit stats` to CaptureStats fields.
_STAT_FIELDS = {
    'Frames': 'frames',
    'Draws': 'draws',
    'Commands': 'commands',
}


class CaptureError(Exception):
  pass


def GapitPath(root, platform=sys.platform):
  return os.path.join(root, 'bazel-bin', 'pkg',
                      artifacts.ExeName('gapit', platform))


def Trace(gapit, pkg, verbose=False, out_dir=None):
  """Traces the package |pkg| for |TRACE_DURATION|.

  Args:
    gapit: path to the gapit executable.
    pkg: name of the package to trace.
    verbose: echo gapit's output.
    out_dir: directory for the trace file. Defaults to the temp directory.

  Returns:
    The path of the trace file. The caller is responsible for removing it.

  Raises:
    CaptureError: if gapit failed. No trace file is left behind.
  """
  trace_file = os.path.join(out_dir or tempfile.gettempdir(), TRACE_FILE_NAME)
  cmd = [
      gapit, '--log-style', 'raw', 'trace', '--for', TRACE_DURATION, '--out',
      trace_file, pkg
  ]
  try:
    process_util.Call(cmd, verbose=verbose)
  except process_util.CommandError as e:
    RemoveTrace(trace_file)
    raise CaptureError(str(e)) from e
  return trace_file


def RemoveTrace(trace_file):
  try:
    os.remove(trace_file)
  except FileNotFoundError:
    pass


def ParseStats(text):
  """Extracts the frame, draw and command counts from `gapit stats` output.

  Unknown counters are ignored, as are values that overflow an int64. A
  counter that appears more than once takes its last value.
  """
  values = {}
  for name, number in _RE_STAT.findall(text):
    field = _STAT_FIELDS.get(name)
    if field is None:
      continue
    value = int(number)
    if value > _MAX_STAT:
      continue
    values[field] = value
  return CaptureStats(**values)


def GetStats(gapit, trace_file, verbose=False):
  """Returns the CaptureStats of |trace_file|.

  A failure to run gapit is not an error: all counters are reported as 0.
  """
  cmd = [gapit, '--log-style', 'raw', '--log-level', 'error', 'stats',
         trace_file]
  try:
    stdout = process_util.Call(cmd, verbose=verbose)
  except process_util.CommandError as e:
    logging.warning('Could not read stats of %s: %s', trace_file, e)
    return CaptureStats()
  return ParseStats(stdout)
