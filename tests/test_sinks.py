"""
# Templex: test_sinks.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `sinks.py`.
"""

import os
import tempfile
import unittest

from templex.exceptions import EmitFailedException
from templex.sinks import DirectoryOutputSink, MemoryOutputSink


class TestSinks(unittest.TestCase):
    def test_directory_output_sink(self):
        with tempfile.TemporaryDirectory() as root_directory:
            output_sink = DirectoryOutputSink(root_directory)
            output_sink.emit('x.y.KlassInt', '// generated from x.y.Klass\nclass KlassInt {}\n')
            output_sink.emit('KlassLong', 'class KlassLong {}\n')

            with open(os.path.join(root_directory, 'x', 'y', 'KlassInt.java'), 'r', encoding='utf-8') as file:
                self.assertEqual(file.read(), '// generated from x.y.Klass\nclass KlassInt {}\n')
            with open(os.path.join(root_directory, 'KlassLong.java'), 'r', encoding='utf-8') as file:
                self.assertEqual(file.read(), 'class KlassLong {}\n')

    def test_directory_output_sink_failure(self):
        with tempfile.TemporaryDirectory() as root_directory:
            blocking_file_name = os.path.join(root_directory, 'blocking')
            with open(blocking_file_name, 'w', encoding='utf-8') as file:
                file.write('')

            with self.assertRaises(EmitFailedException):
                DirectoryOutputSink(blocking_file_name).emit('x.y.KlassInt', 'class KlassInt {}\n')

    def test_memory_output_sink(self):
        output_sink = MemoryOutputSink()
        self.assertEqual(output_sink.text_from_qualified_name, {})

        output_sink.emit('x.y.KlassInt', 'class KlassInt {}')
        output_sink.emit('x.y.KlassLong', 'class KlassLong {}')
        self.assertEqual(
            output_sink.text_from_qualified_name,
            {'x.y.KlassInt': 'class KlassInt {}', 'x.y.KlassLong': 'class KlassLong {}'},
        )


if __name__ == '__main__':
    unittest.main()
