import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from sshpick import cli
from sshpick.errors import ExecError
from sshpick.models import Host


class TestParseArgs(unittest.TestCase):
    def test_defaults(self) -> None:
        args = cli.parse_args([])
        self.assertEqual(args.config, "")
        self.assertEqual(args.local_forward, "")
        self.assertFalse(args.verbose)

    def test_overrides(self) -> None:
        args = cli.parse_args(["-F", "/tmp/cfg", "-L", "8080:localhost:8080", "-v"])
        self.assertEqual(args.config, "/tmp/cfg")
        self.assertEqual(args.local_forward, "8080:localhost:8080")
        self.assertTrue(args.verbose)

    def test_config_path_defaults_to_home(self) -> None:
        self.assertEqual(cli.resolve_config_path(""), Path.home() / ".ssh" / "config")


class TestLoadHosts(unittest.TestCase):
    def test_missing_config_is_empty_host_set(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(cli.load_hosts(Path(tmp) / "absent"), [])

    def test_other_read_errors_exit_nonzero(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(SystemExit) as ctx:
                cli.load_hosts(Path(tmp))
        self.assertEqual(ctx.exception.code, 1)

    def test_parses_existing_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config")
            with open(path, "w", encoding="utf-8") as f:
                f.write("Host a\n  Hostname 192.0.2.1\n")
            hosts = cli.load_hosts(Path(path))
        self.assertEqual([(h.alias, h.resolved_address) for h in hosts], [("a", "192.0.2.1")])


class TestMain(unittest.TestCase):
    def _run_main(self, argv: list[str], chosen: Host | None, exec_result=0):
        with patch.object(cli, "setup_logging"), patch.object(
            cli, "load_hosts", return_value=[Host(alias="a"), Host(alias="b")]
        ), patch.object(cli, "pick_host", return_value=chosen) as pick, patch.object(cli, "exec_ssh") as exec_ssh:
            if isinstance(exec_result, Exception):
                exec_ssh.side_effect = exec_result
            else:
                exec_ssh.return_value = exec_result
            cli.main(argv)
        return pick, exec_ssh

    def test_cancel_does_not_exec(self) -> None:
        _, exec_ssh = self._run_main([], chosen=None)
        exec_ssh.assert_not_called()

    def test_chosen_host_is_handed_to_ssh(self) -> None:
        pick, exec_ssh = self._run_main(["-F", "/tmp/cfg", "-L", "9000:db:5432"], chosen=Host(alias="b"))
        pick.assert_called_once()
        self.assertEqual(pick.call_args.args[1:], ("9000:db:5432", "/tmp/cfg"))
        exec_ssh.assert_called_once_with("b", "9000:db:5432")

    def test_child_exit_status_is_propagated(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run_main([], chosen=Host(alias="a"), exec_result=255)
        self.assertEqual(ctx.exception.code, 255)

    def test_missing_ssh_binary_fails_only_at_handoff(self) -> None:
        with patch.object(cli, "setup_logging"), patch.object(cli, "load_hosts", return_value=[Host(alias="a")]), patch.object(
            cli, "pick_host", return_value=Host(alias="a")
        ) as pick, patch("sshpick.handoff.which_executable", return_value=None):
            with self.assertRaises(SystemExit) as ctx:
                cli.main([])
        pick.assert_called_once()
        self.assertEqual(ctx.exception.code, 1)

    def test_exec_error_exits_nonzero(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run_main([], chosen=Host(alias="a"), exec_result=ExecError(["ssh", "a"], "not found"))
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
