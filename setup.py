"""Custom setup.py to generate _build_info.py during build.

pyproject.toml provides the configuration; this script only adds the
build-time hook writing appconsole/_build_info.py, which --version reads to
show the commit the console was built from.
"""

import subprocess
import sys
from pathlib import Path

from setuptools import setup
from setuptools.command.build_py import build_py

_BUILD_INFO_TEMPLATE = '''\
"""Build information - auto-generated during install, do not edit."""

COMMIT_HASH = "{commit_full}"
COMMIT_SHORT = "{commit_short}"
MODIFIED = {modified}
'''


def _run_git(*args: str) -> str | None:
    """Run git command and return stdout, or None on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            timeout=5,
            cwd=Path(__file__).parent,
        )
        return result.stdout.strip() if result.returncode == 0 else None
    except (subprocess.SubprocessError, FileNotFoundError, OSError):
        return None


def _generate_build_info(package_dir: Path) -> bool:
    """Generate _build_info.py in the given package directory."""
    commit_full = _run_git("rev-parse", "HEAD")
    if not commit_full:
        print(
            "appconsole: git info not available, skipping _build_info.py",
            file=sys.stderr,
        )
        return False

    status = _run_git("status", "--porcelain")
    content = _BUILD_INFO_TEMPLATE.format(
        commit_full=commit_full,
        commit_short=commit_full[:7],
        modified=bool(status),
    )
    (package_dir / "_build_info.py").write_text(content)
    print(f"appconsole: generated _build_info.py ({commit_full[:7]})", file=sys.stderr)
    return True


class BuildPyWithBuildInfo(build_py):
    """build_py that writes _build_info.py into the build directory."""

    def run(self):
        super().run()

        # Written to the build directory so the source tree stays untouched
        if self.build_lib:
            build_package_dir = Path(self.build_lib) / "appconsole"
            if build_package_dir.is_dir():
                _generate_build_info(build_package_dir)


setup(cmdclass={"build_py": BuildPyWithBuildInfo})
