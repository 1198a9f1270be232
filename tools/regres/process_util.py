# Copyright 2026 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.
"""Helpers for invoking the external tools regres drives."""

import logging
import subprocess
import sys

import psutil


class CommandError(Exception):
  """Raised when a child process fails or cannot be started."""

  def __init__(self, cmd, returncode, output=''):
    self.cmd = cmd
    self.returncode = returncode
    self.output = output
    if returncode is None:
      message = 'could not run: %s' % ' '.join(cmd)
    else:
      message = 'command failed (exit %d): %s' % (returncode, ' '.join(cmd))
    super().__init__(message)


def TerminateProcessTree(pid):
  """Terminates process |pid| and all of its descendants.

  Raises:
    RuntimeError: When a process survives both terminate and kill.
  """
  try:
    parent = psutil.Process(pid)
    procs = parent.children(recursive=True) + [parent]
  except psutil.NoSuchProcess:
    return

  logging.debug('Terminating PIDs: %s', [p.pid for p in procs])
  for proc in procs:
    try:
      proc.terminate()
    except psutil.NoSuchProcess:
      pass
  _, alive = psutil.wait_procs(procs, timeout=2.0)
  if not alive:
    return

  logging.info('Terminate failed, moving on to kill.')
  for proc in alive:
    try:
      proc.kill()
    except psutil.NoSuchProcess:
      pass
  _, alive = psutil.wait_procs(alive, timeout=2.0)
  if alive:
    raise RuntimeError('Could not clean up PIDs: %s' %
                       [p.pid for p in alive])


def Call(cmd, cwd=None, verbose=False):
  """Runs |cmd| to completion.

  Args:
    cmd: the command to run, as a list of strings.
    cwd: working directory for the child.
    verbose: if True the command line is logged at INFO, the child's stdout
        is echoed to stderr as it arrives (it is captured either way) and
        the child's stderr is passed through.

  Returns:
    The stripped stdout of the process. The child's stderr is never part of
    it.

  Raises:
    CommandError: if the process could not be started or exited non-zero.
        Its |output| holds the child's stdout followed by its stderr.
  """
  cmd = [str(c) for c in cmd]
  cmd_str = ' '.join(cmd)
  if verbose:
    logging.info('Running: %s', cmd_str)
  else:
    logging.debug('Running: %s', cmd_str)

  try:
    proc = subprocess.Popen(cmd,
                            cwd=cwd,
                            stdout=subprocess.PIPE,
                            stderr=None if verbose else subprocess.PIPE,
                            encoding='utf-8',
                            errors='replace')
  except OSError as e:
    logging.debug('Failed to start %s: %s', cmd[0], e)
    raise CommandError(cmd, None) from e

  try:
    if verbose:
      lines = []
      for line in proc.stdout:
        lines.append(line)
        sys.stderr.write(line)
      proc.wait()
      stdout, stderr = ''.join(lines), ''
    else:
      stdout, stderr = proc.communicate()
  except KeyboardInterrupt:
    TerminateProcessTree(proc.pid)
    raise
  finally:
    proc.stdout.close()
    if proc.stderr:
      proc.stderr.close()

  stdout = stdout.strip()
  if proc.returncode:
    output = '\n'.join(s for s in (stdout, stderr.strip()) if s)
    logging.debug('%s exited with %d:\n%s', cmd[0], proc.returncode, output)
    raise CommandError(cmd, proc.returncode, output)
  return stdout
