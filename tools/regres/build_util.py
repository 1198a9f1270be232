# Copyright 2026 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.
"""Runs and times bazel builds, including incremental rebuilds."""

import collections
import contextlib
import logging
import os
import stat
import time

from regres import process_util

BUILD_TARGET = 'pkg'

# Edited to force an incremental rebuild. Relative to the source root.
TOUCHED_FILE = os.path.join('gapis', 'api', 'gles', 'gles.api')

BuildResult = collections.namedtuple('BuildResult', ['duration', 'succeeded'])


def BuildCommand(optimize):
  cmd = ['bazel', 'build']
  if optimize:
    cmd += ['-c', 'opt']
  cmd.append(BUILD_TARGET)
  return cmd


def Build(root, optimize=False, verbose=False):
  """Builds |BUILD_TARGET| in |root|.

  Returns:
    A BuildResult holding the wall-clock duration in seconds and whether the
    build succeeded.
  """
  start = time.time()
  try:
    process_util.Call(BuildCommand(optimize), cwd=root, verbose=verbose)
    succeeded = True
  except process_util.CommandError as e:
    logging.warning('Build failed: %s', e)
    if e.output:
      logging.debug('Output was: %s', e.output)
    succeeded = False
  return BuildResult(time.time() - start, succeeded)


@contextlib.contextmanager
def TouchedFile(path, rnd):
  """Appends a uniquely named no-op command to the API file at |path|.

  The original contents and permission bits are written back when the
  context exits, however it exits.

  Raises:
    OSError: if |path| cannot be stat'ed or read. Nothing is modified then.
  """
  mode = stat.S_IMODE(os.stat(path).st_mode)
  with open(path, 'rb') as f:
    original = f.read()

  fake_cmd = '\ncmd void fake_cmd_%d() {}\n' % rnd.randrange(1 << 63)
  try:
    with open(path, 'wb') as f:
      f.write(original + fake_cmd.encode('utf-8'))
    yield
  finally:
    with open(path, 'wb') as f:
      f.write(original)
    os.chmod(path, mode)


def TimeIncrementalBuild(config, rnd):
  """Returns the duration of a rebuild after touching |TOUCHED_FILE|.

  Returns 0.0 if the file could not be touched or the rebuild failed.
  """
  path = os.path.join(config.root, TOUCHED_FILE)
  try:
    with TouchedFile(path, rnd):
      result = Build(config.root, config.optimize, config.verbose)
  except OSError as e:
    logging.warning('Could not modify %s: %s', path, e)
    return 0.0
  if not result.succeeded:
    return 0.0
  return result.duration
