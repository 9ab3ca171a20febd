from __future__ import annotations

from typing import Dict

MAIN_PY = "import os\nimport sys\n\ndef main():\n    print('hello')\n"


def build_sample_corpus() -> Dict[str, str]:
    return {
        "src/main.py": MAIN_PY,
        "src/main_verbose.py": MAIN_PY.replace("'hello'", "'hello world'"),
        "src/main_copy.py": MAIN_PY,
        "docs/readme.md": "# Title\n\nSome prose here.\n",
    }
