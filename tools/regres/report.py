# Copyright 2026 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.
"""Per-changelist results and the table they are printed as."""

import dataclasses
import sys
from typing import Dict, List, Optional, TextIO

from regres import artifacts
from regres import capture

SEPARATOR = '-----------------------'


@dataclasses.dataclass
class Result:
  sha: str
  incremental_build_time: float = 0.0  # in seconds
  file_sizes: Dict[artifacts.Artifact, int] = dataclasses.field(
      default_factory=artifacts.EmptySizes)  # in bytes
  capture_stats: capture.CaptureStats = dataclasses.field(
      default_factory=capture.CaptureStats)


def _FormatValue(value) -> str:
  if isinstance(value, float):
    if value.is_integer():
      return '%d' % value
    return repr(value)
  return str(value)


def _AlignColumns(lines: List[str]) -> str:
  """Pads tab-terminated cells so that the columns line up.

  Every cell followed by a tab is padded with spaces to the width of the
  widest cell in its column. The last cell of a line is left as is.
  """
  rows = [line.split('\t') for line in lines]
  widths = []
  for cells in rows:
    for i, cell in enumerate(cells[:-1]):
      if i == len(widths):
        widths.append(1)
      widths[i] = max(widths[i], len(cell))
  out = []
  for cells in rows:
    padded = [cell.ljust(widths[i]) for i, cell in enumerate(cells[:-1])]
    out.append(''.join(padded + cells[-1:]) + '\n')
  return ''.join(out)


def FormatTable(results: List[Result], show_incremental: bool,
                show_capture: bool) -> str:
  columns = []
  if show_incremental:
    columns.append('incremental_build_time')
  if show_capture:
    columns += ['commands', 'draws', 'frames']
  columns += [a.column for a in artifacts.Artifact]

  lines = ['sha' + ''.join('\t | ' + c for c in columns)]
  for r in results:
    values = []
    if show_incremental:
      values.append(r.incremental_build_time)
    if show_capture:
      values += [
          r.capture_stats.commands, r.capture_stats.draws,
          r.capture_stats.frames
      ]
    values += [r.file_sizes[a] for a in artifacts.Artifact]
    cells = [r.sha + ','] + ['\t   ' + _FormatValue(v) + ',' for v in values]
    lines.append(''.join(cells)[:-1])
  return _AlignColumns(lines)


def WriteReport(results: List[Result],
                show_incremental: bool,
                show_capture: bool,
                out: Optional[TextIO] = None):
  print(SEPARATOR)
  table = FormatTable(results, show_incremental, show_capture)
  if out is None:
    out = sys.stdout
  out.write(table)
