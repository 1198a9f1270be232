#!/usr/bin/env python3
# Copyright 2026 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.
"""Tool to display build and runtime statistics over a range of changelists.

For each of the last --count changelists (oldest first) this builds the
`pkg` target, records the size of the packaged binaries and, optionally,
times an incremental build and gathers statistics from a trace of --pkg.

Example Command:
    tools/regres/driver.py --count 5 --pkg com.example.game

Note: this tool will git checkout each changelist in your local repo. The
      original branch is checked out again once done.
"""

import argparse
import dataclasses
import logging
import os
import random
import sys
import time
from typing import List, Optional

if __name__ == '__main__':
  # Make the `regres` package importable when run as a script.
  sys.path[0] = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                             os.pardir)

from regres import artifacts
from regres import build_util
from regres import capture
from regres import git_util
from regres import report


@dataclasses.dataclass
class Config:
  root: str
  verbose: bool = False
  inc: bool = True
  optimize: bool = False
  pkg: str = ''
  out: str = ''
  at: str = ''
  count: int = 2

  @classmethod
  def FromArgs(cls, args):
    return cls(root=os.path.abspath(args.root or os.getcwd()),
               verbose=args.verbose,
               inc=args.inc,
               optimize=args.optimize,
               pkg=args.pkg,
               out=args.out,
               at=args.at,
               count=args.count)

  @property
  def pkg_dir(self):
    return os.path.join(self.root, 'bazel-bin', 'pkg')


def _ProcessChangelist(config, cl, index, rnd) -> Optional[report.Result]:
  """Builds and measures the checked out |cl|.

  Returns:
    The Result, or None if the changelist should be left out of the report.
  """
  sha = cl.sha[:6]
  r = report.Result(sha=sha)

  build = build_util.Build(config.root, config.optimize, config.verbose)
  if not build.succeeded:
    logging.warning('HEAD~%02d: Skipping %s, build failed', index, sha)
    return None
  logging.info('HEAD~%02d: Built %s in %.1fs', index, sha, build.duration)

  r.file_sizes = artifacts.CollectFileSizes(config.pkg_dir)

  if config.pkg:
    gapit = capture.GapitPath(config.root)
    try:
      trace_file = capture.Trace(gapit, config.pkg, config.verbose)
    except capture.CaptureError as e:
      logging.warning("Couldn't capture trace: %s", e)
      return None
    try:
      r.capture_stats = capture.GetStats(gapit, trace_file, config.verbose)
    finally:
      capture.RemoveTrace(trace_file)

  if config.inc:
    logging.info('HEAD~%02d: Building incremental change at %s: %s', index,
                 sha, cl.subject)
    r.incremental_build_time = build_util.TimeIncrementalBuild(config, rnd)

  return r


def Run(config: Config,
        repo: Optional[git_util.GitRepo] = None,
        rnd: Optional[random.Random] = None) -> List[report.Result]:
  """Measures the changelists selected by |config|, oldest first.

  Raises:
    git_util.GitError: if the tree is dirty or listing or checking out a
        changelist failed. The original branch is restored first.
  """
  if repo is None:
    repo = git_util.GitRepo(config.root, config.verbose)
  if rnd is None:
    rnd = random.Random(time.time())

  if not repo.IsClean():
    raise git_util.GitError(
        'Local changes found. Please submit any changes and run again')

  results = []
  with git_util.RestoredBranch(repo):
    cls = repo.LogFrom(config.at, config.count)
    logging.info('Processing %d changelists', len(cls))
    for index in reversed(range(len(cls))):
      cl = cls[index]
      logging.info('HEAD~%02d: Building at %s: %s', index, cl.sha[:6],
                   cl.subject)
      repo.Checkout(cl.sha)
      r = _ProcessChangelist(config, cl, index, rnd)
      if r is not None:
        results.append(r)
  return results


def _WriteResults(config, results):
  if config.out:
    with open(config.out, 'w') as f:
      report.WriteReport(results, config.inc, bool(config.pkg), f)
    logging.info('Results written to %s', config.out)
  else:
    report.WriteReport(results, config.inc, bool(config.pkg))


def _CreateParser():
  parser = argparse.ArgumentParser(
      description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
  parser.add_argument('--root',
                      default='',
                      help='Path to the root GAPID source directory. '
                      'Default: the current directory.')
  parser.add_argument('-v',
                      '--verbose',
                      action='store_true',
                      help='Show the commands executed and their output.')
  parser.add_argument('--inc',
                      dest='inc',
                      action='store_true',
                      default=True,
                      help='Time incremental builds (default).')
  parser.add_argument('--no-inc',
                      dest='inc',
                      action='store_false',
                      help='Do not time incremental builds.')
  parser.add_argument('--optimize',
                      action='store_true',
                      help="Build using '-c opt'.")
  parser.add_argument('--pkg',
                      default='',
                      help='Partial name of a package name to capture.')
  parser.add_argument('--out',
                      default='',
                      help='The results output file. Empty writes to stdout.')
  parser.add_argument('--at',
                      default='',
                      help='The SHA or branch of the first changelist to '
                      'profile. Default: HEAD.')
  parser.add_argument('--count',
                      type=int,
                      default=2,
                      help='The number of changelists to profile.')
  return parser


def main(argv=None):
  parser = _CreateParser()
  args = parser.parse_args(argv)
  if args.count < 1:
    parser.error('--count must be at least 1')

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(levelname).1s %(relativeCreated)6d %(message)s')

  config = Config.FromArgs(args)
  try:
    results = Run(config)
  except git_util.GitError as e:
    logging.error('Failure: %s', e)
    return 1
  _WriteResults(config, results)
  return 0


if __name__ == '__main__':
  sys.exit(main())
