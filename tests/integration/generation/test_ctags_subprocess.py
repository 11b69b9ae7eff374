"""Tag generation against a real subprocess standing in for ctags."""

from __future__ import annotations

import os
import stat
import tempfile
import textwrap
import unittest
from pathlib import Path

from symline.config import SymlineConfig
from symline.session import TagSession

FAKE_CTAGS = textwrap.dedent(
    """\
    #!/bin/sh
    # Echo the argv to a side file, then emit tags out of line order.
    for arg in "$@"; do printf '%s\\n' "$arg"; done > "$(dirname "$0")/argv.txt"
    printf 'second\\tsample.c\\t12;"\\tf\\n'
    printf 'first\\tsample.c\\t3;"\\tf\\n'
    printf 'broken line\\n'
    printf 'third\\tsample.c\\t20;"\\ts\\n'
    """
)


@unittest.skipUnless(os.name == "posix", "needs /bin/sh")
class CtagsSubprocessTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        self.tool = self.root / "fake-ctags"
        self.tool.write_text(FAKE_CTAGS, encoding="utf-8")
        self.tool.chmod(self.tool.stat().st_mode | stat.S_IXUSR)
        self.source = self.root / "my file.c"
        self.source.write_text("int x;\n" * 25, encoding="utf-8")

    def test_generation_streams_real_process_output(self) -> None:
        session = TagSession(SymlineConfig(tool_path=str(self.tool), tool_args=("--if0=yes",)))
        run = session.generate(self.source)
        self.assertIsNotNone(run)
        self.assertTrue(session.wait(run, timeout=10.0))

        self.assertEqual(run.returncode, 0)
        tags = session.tags(self.source)
        self.assertEqual([record.line for record in tags], [0, 3, 12, 20])
        self.assertEqual(session.lookup(self.source, 2), "")
        self.assertEqual(session.lookup(self.source, 3), "first")
        self.assertEqual(session.lookup(self.source, 15), "second")
        self.assertEqual(session.lookup(self.source, 25), "third")

        argv = (self.root / "argv.txt").read_text(encoding="utf-8").splitlines()
        self.assertEqual(argv, ["--if0=yes", "-n", "--sort=no", "-o", "-", str(self.source.resolve())])

    def test_missing_tool_leaves_document_empty(self) -> None:
        session = TagSession(SymlineConfig(tool_path=str(self.root / "nope")))
        self.assertIsNone(session.generate(self.source))
        self.assertEqual(session.lookup(self.source, 10), "")


if __name__ == "__main__":
    unittest.main()
