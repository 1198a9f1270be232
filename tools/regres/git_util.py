# Copyright 2026 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.
"""Thin wrapper around the git operations regres needs."""

import collections
import contextlib
import logging

from regres import process_util

# Separates the hash from the subject in `git log` output.
_FIELD_SEP = '\x1f'

Changelist = collections.namedtuple('Changelist', ['sha', 'subject'])


class GitError(Exception):
  pass


class GitRepo:
  """A git checkout rooted at |root|."""

  def __init__(self, root, verbose=False):
    self.root = root
    self._verbose = verbose

  def _Git(self, args):
    try:
      return process_util.Call(['git', '-C', self.root] + args,
                               verbose=self._verbose)
    except process_util.CommandError as e:
      raise GitError(('%s\n%s' % (e, e.output)).rstrip()) from e

  def IsClean(self):
    """Returns True if the working tree has no local changes at all.

    Untracked files count as changes.
    """
    return not self._Git(['status', '--porcelain'])

  def CurrentBranch(self):
    """Returns the checked out branch, or the commit hash if detached."""
    branch = self._Git(['rev-parse', '--abbrev-ref', 'HEAD'])
    # Happens when the repo didn't start on a named branch.
    if branch == 'HEAD':
      branch = self._Git(['rev-parse', 'HEAD'])
    return branch

  def Checkout(self, rev):
    self._Git(['checkout', '--quiet', rev])

  def CheckoutBranch(self, branch):
    self._Git(['checkout', '--quiet', branch])

  def LogFrom(self, at, count):
    """Returns the |count| most recent changelists ending at |at|.

    Args:
      at: a SHA or branch name. Empty means HEAD.
      count: maximum number of changelists to return.

    Returns:
      A list of Changelist ordered newest first.
    """
    stdout = self._Git([
        'log', '-n', str(count), '--format=%H' + _FIELD_SEP + '%s', at or 'HEAD'
    ])
    ret = []
    for line in stdout.splitlines():
      if not line:
        continue
      sha, _, subject = line.partition(_FIELD_SEP)
      ret.append(Changelist(sha, subject))
    return ret


@contextlib.contextmanager
def RestoredBranch(repo):
  """Records the current branch and checks it out again on exit.

  Yields:
    The name of the recorded branch.
  """
  branch = repo.CurrentBranch()
  try:
    yield branch
  finally:
    logging.info('Restoring original git checkout: %s', branch)
    try:
      repo.CheckoutBranch(branch)
    except GitError as e:
      logging.error('Could not restore %s: %s', branch, e)
