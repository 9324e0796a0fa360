import subprocess
import unittest
from unittest.mock import patch

from sshpick.errors import ExecError
from sshpick.handoff import build_ssh_argv, exec_ssh


class TestBuildSshArgv(unittest.TestCase):
    def test_alias_only(self) -> None:
        self.assertEqual(build_ssh_argv("prod"), ["ssh", "prod"])

    def test_local_forward_goes_before_alias(self) -> None:
        self.assertEqual(
            build_ssh_argv("prod", "8080:localhost:8080"),
            ["ssh", "-L", "8080:localhost:8080", "prod"],
        )


class _Replaced(Exception):
    pass


class TestExecSsh(unittest.TestCase):
    def test_replaces_process_with_ssh(self) -> None:
        with patch("sshpick.handoff.which_executable", return_value="/usr/bin/ssh"):
            with patch("sshpick.handoff.os.execv", side_effect=_Replaced) as execv:
                with patch("sshpick.handoff.subprocess.run") as run:
                    with self.assertRaises(_Replaced):
                        exec_ssh("prod", "9000:db:5432")

        execv.assert_called_once_with("/usr/bin/ssh", ["ssh", "-L", "9000:db:5432", "prod"])
        run.assert_not_called()

    def test_falls_back_to_child_process(self) -> None:
        completed = subprocess.CompletedProcess(args=["ssh"], returncode=255)
        with patch("sshpick.handoff.which_executable", return_value="/usr/bin/ssh"):
            with patch("sshpick.handoff.os.execv", side_effect=OSError("exec not permitted")):
                with patch("sshpick.handoff.subprocess.run", return_value=completed) as run:
                    status = exec_ssh("prod")

        self.assertEqual(status, 255)
        run.assert_called_once_with(["/usr/bin/ssh", "prod"], check=False, stdin=None, stdout=None, stderr=None)

    def test_missing_binary_is_exec_error(self) -> None:
        with patch("sshpick.handoff.which_executable", return_value=None):
            with self.assertRaises(ExecError) as ctx:
                exec_ssh("prod")
        self.assertEqual(ctx.exception.argv, ["ssh", "prod"])

    def test_child_start_failure_is_exec_error(self) -> None:
        with patch("sshpick.handoff.which_executable", return_value="/usr/bin/ssh"):
            with patch("sshpick.handoff.os.execv", side_effect=OSError("no exec")):
                with patch("sshpick.handoff.subprocess.run", side_effect=OSError("no fork")):
                    with self.assertRaises(ExecError):
                        exec_ssh("prod")


if __name__ == "__main__":
    unittest.main()
