from __future__ import annotations
import logging
import os
import platform
import shutil
import subprocess
import sys
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    stdout: str = ''
    stderr: str = ''
    error: Optional[str] = None  # None when the command exited with status 0

    @property
    def ok(self) -> bool:
        return self.error is None

    def diagnostic(self) -> str:
        return (self.stderr or '').strip() or self.error or 'Unknown error'


Runner = Callable[[str], CommandResult]


def is_admin() -> bool:
    try:
        if platform.system() == 'Windows':
            import ctypes
            return ctypes.windll.shell32.IsUserAnAdmin() != 0
        return os.geteuid() == 0
    except (AttributeError, OSError):
        return False


def which(cmd: str) -> str | None:
    return shutil.which(cmd)


def current_platform() -> str:
    return platform.system()


def run_command(cmd: str) -> CommandResult:
    """Run a shell command line and capture its output.

    Never raises for a non-zero exit status; the failure is reported through
    ``CommandResult.error`` instead.
    """
    kwargs = {
        'shell': True,
        'capture_output': True,
        'text': True,
        # Firmware labels are not guaranteed to be valid in the locale encoding
        'errors': 'replace',
    }
    # Hide the console window on Windows
    if platform.system() == 'Windows':
        kwargs['creationflags'] = subprocess.CREATE_NO_WINDOW

    logger.info('Command: %s', cmd)
    try:
        cp = subprocess.run(cmd, **kwargs)
    except OSError as e:
        logger.error('Cannot run %s: %s', cmd, e)
        return CommandResult(error=str(e))

    logger.debug('STDOUT:\n%s', cp.stdout)
    if cp.returncode != 0:
        error = f'Command failed with exit code {cp.returncode}: {cmd}'
        logger.error('%s\nSTDERR:\n%s', error, cp.stderr)
        return CommandResult(cp.stdout or '', cp.stderr or '', error)
    return CommandResult(cp.stdout or '', cp.stderr or '')


def elevate_if_needed(want_gui: bool = True) -> bool:
    """Ensure the process runs with admin/root.

    Returns True if a privileged re-launch was initiated and current process should exit.
    Returns False if already elevated or elevation could not be initiated.
    """
    if is_admin():
        return False

    exe = sys.executable or sys.argv[0]
    if getattr(sys, 'frozen', False):
        relaunch_args = sys.argv[1:]
    else:
        relaunch_args = ['-m', 'boot_switch.main', *sys.argv[1:]]

    if current_platform() == 'Windows':
        try:
            import ctypes
            cmdline = subprocess.list2cmdline(relaunch_args)
            ret = ctypes.windll.shell32.ShellExecuteW(None, 'runas', exe, cmdline, None, 1)
        except (AttributeError, OSError) as e:
            logger.warning('Elevation via ShellExecuteW failed: %s', e)
            return False
        return int(ret) > 32

    # pkexec shows a graphical prompt; sudo only helps from a terminal
    pk = which('pkexec')
    if pk:
        env_args = [f'{key}={os.environ[key]}'
                    for key in ('DISPLAY', 'XAUTHORITY', 'WAYLAND_DISPLAY', 'XDG_RUNTIME_DIR')
                    if os.environ.get(key)]
        try:
            subprocess.Popen([pk, 'env', *env_args, exe, *relaunch_args])
            return True
        except OSError as e:
            logger.warning('pkexec relaunch failed: %s', e)

    sudo = which('sudo')
    if sudo and not want_gui:
        try:
            os.execvp(sudo, [sudo, exe, *relaunch_args])
        except OSError as e:
            logger.warning('sudo relaunch failed: %s', e)
    return False
