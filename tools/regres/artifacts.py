# Copyright 2026 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.
"""Build outputs whose sizes are tracked across changelists."""

import enum
import logging
import os
import sys
from typing import Dict


def DllName(name: str, platform: str = sys.platform) -> str:
  if platform == 'win32':
    return name + '.dll'
  if platform == 'darwin':
    return name + '.dylib'
  return name + '.so'


def ExeName(name: str, platform: str = sys.platform) -> str:
  if platform == 'win32':
    return name + '.exe'
  return name


class Artifact(enum.Enum):
  # Ordered by report column.
  LIB_GAPII = ('lib_gapii', 'lib', 'libgapii', DllName)
  LIB_SWAPCHAIN = ('lib_swapchain', 'lib', 'libVkLayer_VirtualSwapchain',
                   DllName)
  AARCH64_APK = ('aarch64.apk', '', 'gapid-aarch64.apk', None)
  ARMEABI_APK = ('armeabi64.apk', '', 'gapid-armeabi.apk', None)
  X86_APK = ('x86.apk', '', 'gapid-x86.apk', None)
  GAPID = ('gapid', '', 'gapid', ExeName)
  GAPIR = ('gapir', '', 'gapir', ExeName)
  GAPIS = ('gapis', '', 'gapis', ExeName)
  GAPIT = ('gapit', '', 'gapit', ExeName)

  def __init__(self, column, subdir, basename, decorate):
    self.column = column
    self._subdir = subdir
    self._basename = basename
    self._decorate = decorate

  def Path(self, pkg_dir: str, platform: str = sys.platform) -> str:
    name = self._basename
    if self._decorate:
      name = self._decorate(name, platform)
    return os.path.join(pkg_dir, self._subdir, name)


def EmptySizes() -> Dict[Artifact, int]:
  return {a: 0 for a in Artifact}


def CollectFileSizes(pkg_dir: str,
                     platform: str = sys.platform) -> Dict[Artifact, int]:
  """Returns the size in bytes of every artifact under |pkg_dir|.

  Artifacts that cannot be stat'ed are logged and reported as 0.
  """
  sizes = EmptySizes()
  for artifact in Artifact:
    path = artifact.Path(pkg_dir, platform)
    try:
      sizes[artifact] = os.stat(path).st_size
    except OSError as e:
      logging.warning("Couldn't stat file '%s': %s", path, e)
  return sizes
