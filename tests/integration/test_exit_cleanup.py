"""
Integration tests - temporary paths are removed when a real interpreter exits.
"""

import os
from pathlib import Path
import subprocess
import sys
import textwrap

REPO_ROOT = Path(__file__).resolve().parents[2]


def run_script(script: str, temp_root: Path) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["TEMPREG_TEMP_ROOT"] = str(temp_root)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-c", textwrap.dedent(script)],
        capture_output=True,
        text=True,
        env=env,
        timeout=60,
    )


class TestExitCleanup:
    """Test suite for cleanup at interpreter exit."""

    def test_created_resources_removed_at_exit(self, temp_dir):
        temp_root = temp_dir / "root"
        result = run_script(
            """
            import os, stat
            from tempreg.temp_files import create_temp_directory, create_temp_file

            sql = create_temp_file("drush_", None, ".sql")
            staging = create_temp_directory("extract_")
            os.makedirs(os.path.join(staging, "nested"))
            locked = os.path.join(staging, "nested", "locked.txt")
            with open(locked, "w") as f:
                f.write("x")
            os.chmod(locked, stat.S_IRUSR)
            print(sql)
            print(staging)
            """,
            temp_root,
        )

        assert result.returncode == 0, result.stderr
        sql, staging = result.stdout.split()
        assert not os.path.exists(sql)
        assert not os.path.exists(sql[: -len(".sql")])
        assert not os.path.exists(staging)
        assert os.listdir(temp_root) == []

    def test_missing_and_duplicate_paths_do_not_fail_exit(self, temp_dir):
        temp_root = temp_dir / "root"
        temp_root.mkdir()
        gone = temp_root / "gone.txt"
        result = run_script(
            f"""
            import os
            from tempreg.registry import register_for_deletion

            register_for_deletion({str(gone)!r})
            register_for_deletion({str(gone)!r})
            register_for_deletion({str(temp_root / 'never_created')!r})
            open({str(gone)!r}, "w").close()
            """,
            temp_root,
        )

        assert result.returncode == 0, result.stderr
        assert "Traceback" not in result.stderr
        assert not gone.exists()
