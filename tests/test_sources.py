"""
# Templex: test_sources.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `sources.py`.
"""

import os
import tempfile
import unittest

from templex.exceptions import SourceNotFoundException
from templex.sources import DirectorySourceReader, MemorySourceReader


class TestSources(unittest.TestCase):
    def test_directory_source_reader(self):
        with tempfile.TemporaryDirectory() as root_directory:
            os.makedirs(os.path.join(root_directory, 'x', 'y'))
            with open(os.path.join(root_directory, 'x', 'y', 'Klass.java'), 'w', encoding='utf-8', newline='') as file:
                file.write('package x.y;\r\n\r\nclass Klass<T> {}\r\n')

            source_reader = DirectorySourceReader(root_directory)
            self.assertEqual(source_reader.root_directory, root_directory)
            self.assertEqual(
                source_reader.compute_source_file_name('x.y.Klass'),
                os.path.join(root_directory, 'x', 'y', 'Klass.java'),
            )
            self.assertEqual(source_reader.read_source('x.y.Klass'), 'package x.y;\n\nclass Klass<T> {}\n')

            with self.assertRaises(SourceNotFoundException):
                source_reader.read_source('x.y.Missing')
            with self.assertRaises(SourceNotFoundException):
                DirectorySourceReader(root_directory, '.jav').read_source('x.y.Klass')

    def test_memory_source_reader(self):
        source_from_qualified_name = {'x.y.Klass': 'class Klass<T> {}'}
        source_reader = MemorySourceReader(source_from_qualified_name)
        source_from_qualified_name.clear()

        self.assertEqual(source_reader.read_source('x.y.Klass'), 'class Klass<T> {}')
        with self.assertRaises(SourceNotFoundException):
            source_reader.read_source('x.y.Missing')


if __name__ == '__main__':
    unittest.main()
