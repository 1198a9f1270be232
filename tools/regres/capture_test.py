#!/usr/bin/env python3
# Copyright 2026 The Chromium Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

import os
import unittest

import mock
from pyfakefs import fake_filesystem_unittest

from regres import capture
from regres.capture import CaptureStats
from regres import process_util

_GAPIT = '/src/bazel-bin/pkg/gapit'
_TRACE_DIR = '/tmp/regres'


class ParseStatsTest(unittest.TestCase):
  def testAllCounters(self):
    self.assertEqual(capture.ParseStats('Frames: 12 Draws: 5 Commands: 40'),
                     CaptureStats(frames=12, draws=5, commands=40))

  def testMultiline(self):
    text = ('Trace stats\n'
            'Commands:   3456\n'
            'Frames:     120\n'
            'Draws:      789\n')
    self.assertEqual(capture.ParseStats(text), CaptureStats(120, 789, 3456))

  def testUnknownCountersIgnored(self):
    self.assertEqual(capture.ParseStats('Foo: 9 Frames: 2'),
                     CaptureStats(frames=2))

  def testMalformedValue(self):
    self.assertEqual(capture.ParseStats('Frames: abc Draws: 7'),
                     CaptureStats(draws=7))

  def testInt64Overflow(self):
    self.assertEqual(
        capture.ParseStats('Frames: 9223372036854775807 '
                           'Draws: 9223372036854775808 Commands: 3'),
        CaptureStats(frames=9223372036854775807, commands=3))

  def testCaseSensitive(self):
    self.assertEqual(capture.ParseStats('frames: 4 DRAWS: 5'), CaptureStats())

  def testLastValueWins(self):
    self.assertEqual(capture.ParseStats('Frames: 1\nFrames: 2'),
                     CaptureStats(frames=2))

  def testEmpty(self):
    self.assertEqual(capture.ParseStats(''), CaptureStats(0, 0, 0))


class GapitPathTest(unittest.TestCase):
  def testPath(self):
    self.assertEqual(capture.GapitPath('/src', 'linux'),
                     os.path.join('/src', 'bazel-bin', 'pkg', 'gapit'))
    self.assertEqual(capture.GapitPath('/src', 'win32'),
                     os.path.join('/src', 'bazel-bin', 'pkg', 'gapit.exe'))


class TraceTest(fake_filesystem_unittest.TestCase):
  def setUp(self):
    self.setUpPyfakefs()
    self.fs.create_dir(_TRACE_DIR)
    self.trace_file = os.path.join(_TRACE_DIR, capture.TRACE_FILE_NAME)
    self._call = mock.patch('regres.capture.process_util.Call').start()

  def tearDown(self):
    mock.patch.stopall()

  def testTrace(self):
    def fake_gapit(cmd, verbose):
      self.fs.create_file(self.trace_file, contents='trace')
      return ''

    self._call.side_effect = fake_gapit
    path = capture.Trace(_GAPIT, 'com.example.game', out_dir=_TRACE_DIR)
    self.assertEqual(path, self.trace_file)
    self.assertTrue(os.path.exists(path))
    self._call.assert_called_once_with([
        _GAPIT, '--log-style', 'raw', 'trace', '--for', '60s', '--out',
        self.trace_file, 'com.example.game'
    ],
                                       verbose=False)

  def testFailureRemovesPartialTrace(self):
    def fake_gapit(cmd, verbose):
      self.fs.create_file(self.trace_file, contents='partial')
      raise process_util.CommandError(cmd, 1)

    self._call.side_effect = fake_gapit
    with self.assertRaises(capture.CaptureError):
      capture.Trace(_GAPIT, 'com.example.game', out_dir=_TRACE_DIR)
    self.assertFalse(os.path.exists(self.trace_file))

  def testFailureWithoutTrace(self):
    self._call.side_effect = process_util.CommandError([_GAPIT], None)
    with self.assertRaises(capture.CaptureError):
      capture.Trace(_GAPIT, 'com.example.game', out_dir=_TRACE_DIR)

  def testRemoveTrace(self):
    self.fs.create_file(self.trace_file)
    capture.RemoveTrace(self.trace_file)
    self.assertFalse(os.path.exists(self.trace_file))
    # Removing it again is fine.
    capture.RemoveTrace(self.trace_file)


class GetStatsTest(unittest.TestCase):
  def setUp(self):
    self._call = mock.patch('regres.capture.process_util.Call').start()

  def tearDown(self):
    mock.patch.stopall()

  def testGetStats(self):
    self._call.return_value = 'Commands: 40\nDraws: 5\nFrames: 12'
    self.assertEqual(capture.GetStats(_GAPIT, '/tmp/t.gfxtrace'),
                     CaptureStats(12, 5, 40))
    self._call.assert_called_once_with([
        _GAPIT, '--log-style', 'raw', '--log-level', 'error', 'stats',
        '/tmp/t.gfxtrace'
    ],
                                       verbose=False)

  def testFailureYieldsZeros(self):
    self._call.side_effect = process_util.CommandError([_GAPIT], 2)
    with self.assertLogs(level='WARNING'):
      stats = capture.GetStats(_GAPIT, '/tmp/t.gfxtrace')
    self.assertEqual(stats, CaptureStats(0, 0, 0))


if __name__ == '__main__':
  unittest.main()
