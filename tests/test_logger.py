import unittest
import logging
import os
import sys
import tempfile
from pathlib import Path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from favicon_gen.logger import setup_logging


class TestLogger(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = logging.getLogger()
        self.saved_handlers = self.root.handlers[:]
        self.saved_level = self.root.level

    def tearDown(self):
        for handler in self.root.handlers[:]:
            handler.close()
            self.root.removeHandler(handler)
        for handler in self.saved_handlers:
            self.root.addHandler(handler)
        self.root.setLevel(self.saved_level)
        self.tmp.cleanup()

    def test_setup_logging_archives_old_runs(self):
        log_dir = Path(self.tmp.name) / 'logs'
        log_dir.mkdir()
        (log_dir / 'run_20000101_000000.log').write_text('old run')

        logger, log_path = setup_logging(str(log_dir))
        logging.getLogger('favicon_gen.test').info('hello')
        for handler in logger.handlers:
            handler.flush()

        self.assertTrue((log_dir / 'archive' / 'run_20000101_000000.log').exists())
        self.assertEqual(log_path.parent, log_dir)
        self.assertIn('hello', log_path.read_text(encoding='utf-8'))
        self.assertEqual(logging.getLogger('PIL').level, logging.WARNING)


if __name__ == '__main__':
    unittest.main()
