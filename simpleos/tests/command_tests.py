#!/usr/bin/env python3
"""
SimpleOS Command Tests

Drives a fresh kernel through command lines and checks the text that
comes back, plus the terminal shell, the bootloader and the entry point.

Run with: python -m pytest simpleos/tests/command_tests.py -v
Or: python simpleos/tests/command_tests.py

Author: YSNRFD
Version: 1.0.0
"""

import contextlib
import io
import os
import re
import sys
import tempfile
import time
import unittest
from datetime import datetime
from unittest import mock

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))


class FakeClock:
    """Manually advanced clock for the event loop."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class KernelTestCase(unittest.TestCase):
    """Base class giving each test a fresh kernel on a fake clock."""

    def setUp(self):
        from simpleos.core.event_loop import EventLoop
        from simpleos.core.kernel import Kernel

        self.clock = FakeClock()
        self.kernel = Kernel(event_loop=EventLoop(clock=self.clock))

    def run_cmd(self, line: str) -> str:
        return self.kernel.execute(line)

    def reap(self) -> None:
        """Let every pending process removal fire."""
        self.clock.advance(self.kernel.config.process.reap_delay)
        self.kernel.event_loop.process_events()


class TestBasicCommands(KernelTestCase):
    """Test the commands that only read session state."""

    def test_help(self):
        """Test help lists every command."""
        from simpleos.shell.builtins import HELP_TEXT

        output = self.run_cmd("help")

        self.assertEqual(output, HELP_TEXT)
        self.assertTrue(output.startswith("Available commands:"))
        for name in self.kernel.dispatcher.builtins.get_commands():
            self.assertIn(f"  {name}", output)

    def test_echo(self):
        """Test echo joins arguments with single spaces."""
        self.assertEqual(self.run_cmd("echo hello    world"), "hello world")
        self.assertEqual(self.run_cmd("echo"), "")

    def test_pwd_starts_at_home(self):
        """Test the session starts in the home directory."""
        self.assertEqual(self.run_cmd("pwd"), "/home/user")

    def test_whoami(self):
        """Test the current user."""
        self.assertEqual(self.run_cmd("whoami"), "user")

    def test_date(self):
        """Test date shows the current year."""
        self.assertIn(str(datetime.now().year), self.run_cmd("date"))

    def test_uptime(self):
        """Test the uptime layout."""
        self.assertRegex(self.run_cmd("uptime"), r"^Uptime: \d+h \d+m \d+s$")

    def test_format_uptime(self):
        """Test uptime arithmetic."""
        from simpleos.core.session import format_uptime

        self.assertEqual(format_uptime(0), "0h 0m 0s")
        self.assertEqual(format_uptime(3725.9), "1h 2m 5s")
        self.assertEqual(format_uptime(90000), "25h 0m 0s")

    def test_clear(self):
        """Test clear returns the sentinel."""
        from simpleos import CLEAR_SENTINEL

        self.assertEqual(self.run_cmd("clear"), CLEAR_SENTINEL)

    def test_unknown_command(self):
        """Test unknown commands."""
        self.assertEqual(self.run_cmd("frobnicate now"), "frobnicate: command not found")

    def test_command_names_are_case_insensitive(self):
        """Test the command name is lower-cased but arguments are not."""
        self.assertEqual(self.run_cmd("ECHO Hello"), "Hello")
        self.assertEqual(self.run_cmd("FOO"), "foo: command not found")

    def test_blank_input(self):
        """Test blank input produces nothing."""
        self.assertEqual(self.run_cmd(""), "")
        self.assertEqual(self.run_cmd("   \t"), "")

    def test_unexpected_errors_become_text(self):
        """Test an unexpected failure inside a command is reported, not raised."""
        with mock.patch.object(
            self.kernel.filesystem, 'list_directory',
            side_effect=RuntimeError("boom")
        ):
            self.assertEqual(self.run_cmd("ls"), "ls: boom")


class TestDirectoryCommands(KernelTestCase):
    """Test ls, cd and mkdir."""

    def test_ls_home(self):
        """Test the seeded home directory listing."""
        self.assertEqual(self.run_cmd("ls"), "readme.txt")

    def test_ls_root(self):
        """Test directories are marked."""
        self.assertEqual(self.run_cmd("ls /"), "[DIR] home/\n[DIR] bin/\n[DIR] etc/")

    def test_ls_empty_directory(self):
        """Test an empty directory lists as nothing."""
        self.assertEqual(self.run_cmd("ls /bin"), "")

    def test_ls_insertion_order(self):
        """Test children are listed in creation order, not sorted."""
        self.run_cmd("mkdir z")
        self.run_cmd("mkdir a")

        self.assertEqual(self.run_cmd("ls"), "readme.txt\n[DIR] z/\n[DIR] a/")

    def test_ls_errors(self):
        """Test ls failure messages."""
        self.assertEqual(
            self.run_cmd("ls /nope"),
            "ls: cannot access '/nope': No such file or directory"
        )
        self.assertEqual(
            self.run_cmd("ls readme.txt"),
            "ls: cannot list 'readme.txt': Not a directory"
        )

    def test_cd_absolute_and_relative(self):
        """Test cd to absolute and relative directories."""
        self.assertEqual(self.run_cmd("cd /etc"), "")
        self.assertEqual(self.run_cmd("pwd"), "/etc")

        self.run_cmd("cd /home")
        self.run_cmd("cd user")
        self.assertEqual(self.run_cmd("pwd"), "/home/user")

    def test_cd_normalizes_slashes(self):
        """Test the working directory is stored in canonical form."""
        self.run_cmd("cd //home///user/")
        self.assertEqual(self.run_cmd("pwd"), "/home/user")

        self.run_cmd("cd /")
        self.assertEqual(self.run_cmd("pwd"), "/")

    def test_cd_home(self):
        """Test cd without an argument returns home."""
        self.run_cmd("cd /etc")
        self.run_cmd("cd")
        self.assertEqual(self.run_cmd("pwd"), "/home/user")

    def test_cd_parent(self):
        """Test cd .. drops one segment and stops at the root."""
        self.run_cmd("cd ..")
        self.assertEqual(self.run_cmd("pwd"), "/home")

        self.run_cmd("cd ..")
        self.run_cmd("cd ..")
        self.assertEqual(self.run_cmd("pwd"), "/")

    def test_cd_failure_preserves_cwd(self):
        """Test a failed cd leaves the working directory alone."""
        self.assertEqual(self.run_cmd("cd /nope"), "cd: /nope: No such file or directory")
        self.assertEqual(self.run_cmd("pwd"), "/home/user")

        self.assertEqual(self.run_cmd("cd readme.txt"), "cd: readme.txt: Not a directory")
        self.assertEqual(self.run_cmd("pwd"), "/home/user")

    def test_dot_segments_are_literal(self):
        """Test '.' and '..' inside paths are ordinary names."""
        self.assertEqual(self.run_cmd("cd ."), "cd: .: No such file or directory")
        self.assertEqual(self.run_cmd("cd ../user"), "cd: ../user: No such file or directory")
        self.assertEqual(self.run_cmd("cat ../x"), "cat: ../x: No such file or directory")

    def test_mkdir(self):
        """Test mkdir creates nested directories one level at a time."""
        self.assertEqual(self.run_cmd("mkdir notes"), "")
        self.assertEqual(self.run_cmd("mkdir notes/2026"), "")
        self.assertEqual(self.run_cmd("ls notes"), "[DIR] 2026/")

    def test_mkdir_errors(self):
        """Test mkdir failure messages."""
        self.assertEqual(self.run_cmd("mkdir"), "mkdir: missing operand")
        self.assertEqual(
            self.run_cmd("mkdir /bin"),
            "mkdir: cannot create directory '/bin': File exists"
        )
        self.assertEqual(
            self.run_cmd("mkdir readme.txt"),
            "mkdir: cannot create directory 'readme.txt': File exists"
        )
        self.assertEqual(
            self.run_cmd("mkdir /"),
            "mkdir: cannot create directory '/': File exists"
        )
        self.assertEqual(
            self.run_cmd("mkdir a/b"),
            "mkdir: cannot create directory 'a/b': No such file or directory"
        )
        self.assertEqual(
            self.run_cmd("mkdir readme.txt/b"),
            "mkdir: cannot create directory 'readme.txt/b': No such file or directory"
        )


class TestFileCommands(KernelTestCase):
    """Test cat, touch, write and rm."""

    def test_cat(self):
        """Test reading the seeded files."""
        from simpleos.filesystem.tree import README_TEXT

        self.assertEqual(self.run_cmd("cat readme.txt"), README_TEXT)
        self.assertEqual(
            self.run_cmd("cat /etc/passwd"),
            "user:x:1000:1000:Default User:/home/user:/bin/sh"
        )

    def test_cat_errors(self):
        """Test cat failure messages."""
        self.assertEqual(self.run_cmd("cat"), "cat: missing file operand")
        self.assertEqual(self.run_cmd("cat nope"), "cat: nope: No such file or directory")
        self.assertEqual(self.run_cmd("cat /bin"), "cat: /bin: Is a directory")

    def test_touch_creates_empty_file(self):
        """Test touch creates an empty file."""
        self.assertEqual(self.run_cmd("touch todo.txt"), "")
        self.assertEqual(self.run_cmd("cat todo.txt"), "")
        self.assertEqual(self.run_cmd("ls"), "readme.txt\ntodo.txt")

    def test_touch_is_idempotent(self):
        """Test touching an existing file keeps its content and position."""
        self.run_cmd("write todo.txt buy milk")
        self.run_cmd("touch todo.txt")
        self.run_cmd("touch todo.txt")

        self.assertEqual(self.run_cmd("cat todo.txt"), "buy milk")
        self.assertEqual(self.run_cmd("ls"), "readme.txt\ntodo.txt")

    def test_touch_existing_directory(self):
        """Test touching a directory is a silent no-op."""
        self.assertEqual(self.run_cmd("touch /bin"), "")
        self.assertEqual(self.run_cmd("ls /bin"), "")

    def test_touch_errors(self):
        """Test touch failure messages."""
        self.assertEqual(self.run_cmd("touch"), "touch: missing file operand")
        self.assertEqual(
            self.run_cmd("touch /nope/f"),
            "touch: cannot touch '/nope/f': No such file or directory"
        )

    def test_write(self):
        """Test write creates and overwrites files."""
        self.assertEqual(self.run_cmd("write notes.txt first   draft"), "")
        self.assertEqual(self.run_cmd("cat notes.txt"), "first draft")

        self.run_cmd("write notes.txt final")
        self.assertEqual(self.run_cmd("cat notes.txt"), "final")
        self.assertEqual(self.kernel.filesystem.resolve("/home/user/notes.txt").size, 5)

    def test_write_errors(self):
        """Test write failure messages."""
        self.assertEqual(self.run_cmd("write"), "write: missing file operand or content")
        self.assertEqual(self.run_cmd("write f.txt"), "write: missing file operand or content")
        self.assertEqual(
            self.run_cmd("write /bin text"),
            "write: cannot write to '/bin': Is a directory"
        )
        self.assertEqual(
            self.run_cmd("write nodir/f.txt text"),
            "write: cannot write to 'nodir/f.txt': No such directory"
        )

    def test_rm_file(self):
        """Test removing a file."""
        self.assertEqual(self.run_cmd("rm readme.txt"), "")
        self.assertEqual(self.run_cmd("ls"), "")

    def test_rm_removes_subtree(self):
        """Test removing a non-empty directory."""
        self.run_cmd("mkdir d")
        self.run_cmd("touch d/f")
        self.run_cmd("cd d")
        self.run_cmd("mkdir e")
        self.run_cmd("cd ..")

        self.assertEqual(self.run_cmd("rm d"), "")
        self.assertNotIn("d/", self.run_cmd("ls"))
        self.assertIsNone(self.kernel.filesystem.resolve("d/f", "/home/user"))
        self.assertEqual(self.run_cmd("cat d/f"), "cat: d/f: No such file or directory")

    def test_rm_errors(self):
        """Test rm failure messages."""
        self.assertEqual(self.run_cmd("rm"), "rm: missing operand")
        self.assertEqual(
            self.run_cmd("rm nope"),
            "rm: cannot remove 'nope': No such file or directory"
        )
        self.assertEqual(
            self.run_cmd("rm /"),
            "rm: cannot remove '/': No such file or directory"
        )

    def test_rm_working_directory(self):
        """Test removing an ancestor of the working directory moves it up."""
        self.run_cmd("mkdir /tmp")
        self.run_cmd("mkdir /tmp/a")
        self.run_cmd("mkdir /tmp/a/b")
        self.run_cmd("cd /tmp/a/b")

        self.assertEqual(self.run_cmd("rm /tmp/a"), "")
        self.assertEqual(self.run_cmd("pwd"), "/tmp")
        self.assertEqual(self.run_cmd("ls"), "")

    def test_end_to_end(self):
        """Test a typical session."""
        self.assertEqual(self.run_cmd("mkdir notes"), "")
        self.assertEqual(self.run_cmd("cd notes"), "")
        self.assertEqual(self.run_cmd("touch todo.txt"), "")
        self.assertEqual(self.run_cmd("write todo.txt buy milk"), "")
        self.assertEqual(self.run_cmd("cat todo.txt"), "buy milk")
        self.assertEqual(self.run_cmd("pwd"), "/home/user/notes")
        self.assertEqual(self.run_cmd("cd .."), "")
        self.assertEqual(self.run_cmd("pwd"), "/home/user")
        self.assertEqual(self.run_cmd("ls"), "readme.txt\n[DIR] notes/")
        self.assertEqual(self.run_cmd("rm notes"), "")
        self.assertEqual(self.run_cmd("ls"), "readme.txt")


class TestProcessCommands(KernelTestCase):
    """Test ps and kill."""

    def test_ps(self):
        """Test the process listing layout."""
        from simpleos.shell.builtins import PS_HEADER

        lines = self.run_cmd("ps").split("\n")

        self.assertEqual(lines[0], PS_HEADER)
        self.assertEqual(len(lines), 3)
        self.assertRegex(
            lines[1],
            r"^1    root     running   \d{4}-\d\d-\d\d \d\d:\d\d:\d\d init$"
        )
        self.assertRegex(
            lines[2],
            r"^2    user     running   \d{4}-\d\d-\d\d \d\d:\d\d:\d\d shell$"
        )

    def test_kill(self):
        """Test kill marks the process and removes it after the delay."""
        self.assertEqual(self.run_cmd("kill 2"), "Process with PID 2 terminated")
        self.assertIn("terminated", self.run_cmd("ps").split("\n")[2])

        self.reap()

        lines = self.run_cmd("ps").split("\n")
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[1].startswith("1 "))
        self.assertEqual(self.run_cmd("kill 2"), "kill: no process with PID 2")

    def test_kill_init(self):
        """Test init is never killed."""
        self.assertEqual(self.run_cmd("kill 1"), "kill: cannot kill init process")
        self.reap()
        self.assertIn(" init", self.run_cmd("ps"))
        self.assertEqual(self.run_cmd("kill 1"), "kill: cannot kill init process")

    def test_kill_errors(self):
        """Test kill failure messages."""
        self.assertEqual(self.run_cmd("kill"), "kill: missing PID operand")
        self.assertEqual(self.run_cmd("kill abc"), "kill: invalid PID: abc")
        self.assertEqual(self.run_cmd("kill 3x"), "kill: invalid PID: 3x")
        self.assertEqual(self.run_cmd("kill 1_0"), "kill: invalid PID: 1_0")
        self.assertEqual(self.run_cmd("kill ２"), "kill: invalid PID: ２")
        self.assertEqual(self.run_cmd("kill 99"), "kill: no process with PID 99")
        self.assertEqual(self.kernel.process_table.process_count, 2)

    def test_kill_twice_before_reap(self):
        """Test killing a terminated but unreaped process again."""
        self.run_cmd("kill 2")
        self.assertEqual(self.run_cmd("kill 2"), "Process with PID 2 terminated")

        self.reap()
        self.assertEqual(self.kernel.process_table.process_count, 1)

    def test_removal_after_shutdown_is_dropped(self):
        """Test a pending removal never fires once the kernel is shut down."""
        self.run_cmd("kill 2")
        self.kernel.shutdown()

        self.reap()

        self.assertEqual(self.kernel.process_table.process_count, 2)
        self.assertEqual(self.kernel.event_loop.pending_count, 0)


class TestSystemLog(KernelTestCase):
    """Test the System Log."""

    def test_initialized_entry(self):
        """Test the kernel records its own initialization."""
        entries = self.kernel.system_log.entries()

        self.assertEqual(entries[0].level, "INFO")
        self.assertEqual(entries[0].message, "System initialized")

    def test_commands_are_logged_before_dispatch(self):
        """Test every non-blank line is recorded, even unknown ones."""
        self.run_cmd("ls /nope")
        self.run_cmd("bogus")

        messages = [e.message for e in self.kernel.system_log.entries()]
        self.assertEqual(messages[-2:], ["Executing: ls /nope", "Executing: bogus"])

    def test_blank_lines_are_not_logged(self):
        """Test blank input adds no entry."""
        before = len(self.kernel.system_log)
        self.run_cmd("   ")
        self.assertEqual(len(self.kernel.system_log), before)


class TestKernel(KernelTestCase):
    """Test the kernel lifecycle."""

    def test_shutdown_command(self):
        """Test shutdown stops the session."""
        self.assertTrue(self.kernel.is_running())
        self.assertEqual(self.run_cmd("shutdown"), "System is shutting down...")
        self.assertFalse(self.kernel.is_running())

    def test_boot_banner(self):
        """Test boot returns the banner and records the boot."""
        from simpleos.core.kernel import KernelState

        banner = self.kernel.boot()
        self.addCleanup(self.kernel.shutdown)

        self.assertEqual(
            banner,
            "SimpleOS v0.1 - Primitive OS Simulation\n"
            "Type 'help' for available commands."
        )
        self.assertEqual(self.kernel.state, KernelState.RUNNING)
        self.assertEqual(
            self.kernel.system_log.entries()[-1].message,
            "SimpleOS is booting..."
        )

    def test_shutdown_is_idempotent(self):
        """Test shutdown can be called repeatedly and blocks a reboot."""
        from simpleos.core.kernel import KernelState
        from simpleos.exceptions import ShutdownError

        self.kernel.shutdown()
        self.kernel.shutdown()

        self.assertEqual(self.kernel.state, KernelState.SHUTDOWN)
        self.assertFalse(self.kernel.is_running())
        with self.assertRaises(ShutdownError):
            self.kernel.boot()

    def test_system_info(self):
        """Test the system information snapshot."""
        info = self.kernel.get_system_info()

        self.assertEqual(info.name, "SimpleOS")
        self.assertEqual(info.version, "0.1")
        self.assertEqual(info.current_user, "user")
        self.assertEqual(info.process_count, 2)

    def test_kernels_are_independent(self):
        """Test two kernels share no state."""
        from simpleos.core.kernel import Kernel

        other = Kernel()
        self.run_cmd("mkdir mine")

        self.assertEqual(other.execute("ls"), "readme.txt")

    def test_custom_session(self):
        """Test the configured user and home."""
        from simpleos.core.config_loader import Config
        from simpleos.core.kernel import Kernel

        config = Config()
        config.session.user = 'alice'
        config.session.home = '/users/alice'
        kernel = Kernel(config=config)

        self.assertEqual(kernel.execute("pwd"), "/users/alice")
        self.assertEqual(kernel.execute("whoami"), "alice")
        self.assertIn("alice", kernel.execute("ps").split("\n")[2])

    def test_unseeded_kernel_starts_at_home(self):
        """Test a kernel without the standard tree still has a usable working directory."""
        from simpleos.core.config_loader import Config
        from simpleos.core.kernel import Kernel

        config = Config()
        config.filesystem.seed_standard_tree = False
        kernel = Kernel(config=config)

        self.assertEqual(kernel.execute("pwd"), "/home/user")
        self.assertTrue(kernel.filesystem.is_directory(kernel.session.current_directory))
        self.assertEqual(kernel.execute("ls"), "")
        self.assertEqual(kernel.execute("ls /"), "[DIR] home/")

    def test_home_with_trailing_slash(self):
        """Test the configured home is stored without a trailing slash."""
        from simpleos.core.config_loader import Config
        from simpleos.core.kernel import Kernel

        config = Config()
        config.session.home = '/home/user/'
        kernel = Kernel(config=config)

        self.assertEqual(kernel.execute("pwd"), "/home/user")
        kernel.execute("cd /")
        kernel.execute("cd")
        self.assertEqual(kernel.execute("pwd"), "/home/user")
        self.assertIn(":/home/user:", kernel.execute("cat /etc/passwd"))

    def test_background_reap(self):
        """Test the event loop thread removes killed processes by itself."""
        from simpleos.core.config_loader import Config
        from simpleos.core.kernel import Kernel

        config = Config()
        config.process.reap_delay = 0.05
        kernel = Kernel(config=config)
        kernel.boot()
        self.addCleanup(kernel.shutdown)

        kernel.execute("kill 2")

        deadline = time.monotonic() + 2.0
        while kernel.process_table.process_count > 1 and time.monotonic() < deadline:
            time.sleep(0.01)

        self.assertEqual(kernel.process_table.process_count, 1)


class TestShell(KernelTestCase):
    """Test the terminal loop."""

    def setUp(self):
        super().setUp()
        from simpleos.shell.shell import Shell

        self.output = io.StringIO()
        self.shell = Shell(self.kernel, output=self.output)

    def test_run_until_shutdown(self):
        """Test the loop prints output and stops on shutdown."""
        from simpleos.shell.shell import CLEAR_SCREEN, SHUTDOWN_MESSAGE

        with mock.patch('builtins.input', side_effect=["echo hi", "", "clear", "shutdown", "echo never"]):
            self.shell.run(banner="BANNER")

        self.assertEqual(
            self.output.getvalue(),
            "BANNER\nhi\n" + CLEAR_SCREEN
            + "System is shutting down...\n" + SHUTDOWN_MESSAGE + "\n"
        )

    def test_run_until_eof(self):
        """Test end of input ends the loop without shutting down."""
        from simpleos.shell.shell import SHUTDOWN_MESSAGE

        with mock.patch('builtins.input', side_effect=["pwd", EOFError]):
            self.shell.run()

        self.assertEqual(self.output.getvalue(), "/home/user\n\n")
        self.assertNotIn(SHUTDOWN_MESSAGE, self.output.getvalue())
        self.assertTrue(self.kernel.is_running())

    def test_interrupt_keeps_running(self):
        """Test Ctrl-C abandons the current line only."""
        with mock.patch('builtins.input', side_effect=[KeyboardInterrupt, "whoami", "shutdown"]):
            self.shell.run()

        self.assertTrue(self.output.getvalue().startswith("^C\nuser\n"))

    def test_prompt(self):
        """Test the configured prompt is used."""
        with mock.patch('builtins.input', side_effect=["shutdown"]) as fake_input:
            self.shell.run()

        fake_input.assert_called_with("$ ")

    def test_run_script(self):
        """Test scripts skip comments and stop at shutdown."""
        outputs = self.shell.run_script(
            "# setup\n"
            "mkdir notes\n"
            "\n"
            "ls\n"
            "shutdown\n"
            "echo unreachable\n"
        )

        self.assertEqual(outputs, ["", "readme.txt\n[DIR] notes/", "System is shutting down..."])
        self.assertNotIn("unreachable", self.output.getvalue())


class TestBootloader(unittest.TestCase):
    """Test the boot sequence and entry point."""

    def tearDown(self):
        from simpleos.core.config_loader import ConfigLoader
        from simpleos.logger import Logger

        ConfigLoader().reset()
        Logger.reset()

    def _write_temp(self, text: str, suffix: str = '.json') -> str:
        fd, path = tempfile.mkstemp(suffix=suffix)
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(text)
        self.addCleanup(os.remove, path)
        return path

    def test_boot_with_defaults(self):
        """Test booting without a configuration file."""
        from simpleos.core.bootloader import Bootloader, BootStage
        from simpleos.core.kernel import Kernel

        bootloader = Bootloader()
        result = bootloader.boot()
        self.addCleanup(bootloader.shutdown)

        self.assertTrue(result.success)
        self.assertEqual(result.stage, BootStage.COMPLETE)
        self.assertTrue(result.banner.startswith("SimpleOS v0.1"))
        self.assertIsInstance(bootloader.get_kernel(), Kernel)

    def test_missing_config_uses_defaults(self):
        """Test a config path that does not exist falls back to defaults."""
        from simpleos.core.bootloader import boot_system

        result, kernel = boot_system('/definitely/not/here.json')
        self.addCleanup(kernel.shutdown)

        self.assertTrue(result.success)
        self.assertEqual(kernel.execute("whoami"), "user")

    def test_boot_with_config(self):
        """Test settings from a configuration file reach the kernel."""
        from simpleos.core.bootloader import Bootloader

        path = self._write_temp(
            '{"session": {"user": "alice", "home": "/home/alice"},'
            ' "logging": {"console_output": false}}'
        )
        bootloader = Bootloader(path)
        result = bootloader.boot()
        self.addCleanup(bootloader.shutdown)

        self.assertTrue(result.success)
        kernel = bootloader.get_kernel()
        self.assertEqual(kernel.execute("whoami"), "alice")
        self.assertEqual(kernel.execute("pwd"), "/home/alice")

    def test_boot_failure(self):
        """Test a broken configuration file fails at the config stage."""
        from simpleos.core.bootloader import Bootloader, BootStage
        from simpleos.exceptions import BootFailureError

        bootloader = Bootloader(self._write_temp("{broken"))
        result = bootloader.boot()

        self.assertFalse(result.success)
        self.assertEqual(result.stage, BootStage.CONFIG_LOAD)
        self.assertEqual(bootloader.stage, BootStage.FAILED)
        self.assertIsInstance(result.error, BootFailureError)
        self.assertIsNone(bootloader.get_kernel())

    def test_invalid_setting(self):
        """Test settings the kernel cannot use are rejected while loading."""
        from simpleos.core.bootloader import Bootloader, BootStage
        from simpleos.exceptions import ConfigValidationError

        result = Bootloader(self._write_temp('{"session": {"home": "home/user"}}')).boot()

        self.assertFalse(result.success)
        self.assertEqual(result.stage, BootStage.CONFIG_LOAD)
        self.assertIsInstance(result.error, ConfigValidationError)
        self.assertEqual(result.error.context['key'], 'session.home')

    def test_main_script(self):
        """Test the entry point running a script."""
        from simpleos.main import main

        path = self._write_temp("echo hello\n# comment\nshutdown\n", suffix='.txt')
        stdout = io.StringIO()

        with contextlib.redirect_stdout(stdout):
            code = main(['--script', path])

        self.assertEqual(code, 0)
        output = stdout.getvalue()
        self.assertIn("SimpleOS v0.1 - Primitive OS Simulation", output)
        self.assertIn("hello\n", output)
        self.assertIn("System is shutting down...", output)

    def test_main_boot_failure(self):
        """Test the entry point reports a failed boot."""
        from simpleos.main import main

        path = self._write_temp("[]")
        stderr = io.StringIO()

        with contextlib.redirect_stderr(stderr):
            code = main(['--config', path])

        self.assertEqual(code, 1)
        self.assertTrue(re.search(r"Boot failed at stage CONFIG_LOAD", stderr.getvalue()))


def run_tests():
    """Run all tests."""
    loader = unittest.TestLoader()
    suite = loader.loadTestsFromModule(sys.modules[__name__])

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(run_tests())
