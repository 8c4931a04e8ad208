"""Bridge that runs a command under the Windows Service Control Manager.

The generated batch wrapper invokes it as:

    python -m svcinstall.service.winservice --service-name NAME -- COMMAND...

Windows only; requires pywin32.
"""

import logging
import subprocess
from typing import Annotated

import typer

logger = logging.getLogger(__name__)

# Raised by StartServiceCtrlDispatcher when not launched by the SCM
ERROR_FAILED_SERVICE_CONTROLLER_CONNECT = 1063

app = typer.Typer(add_completion=False)


def run_as_service(service_name: str, command: str) -> None:
    """Host the command as a single service and block until it stops."""
    import pywintypes
    import servicemanager
    import win32event
    import win32service
    import win32serviceutil

    class CommandService(win32serviceutil.ServiceFramework):
        _svc_name_ = service_name
        _svc_display_name_ = service_name

        def __init__(self, args):
            win32serviceutil.ServiceFramework.__init__(self, args)
            self.stop_event = win32event.CreateEvent(None, 0, 0, None)
            self.process: subprocess.Popen | None = None

        def SvcStop(self):
            self.ReportServiceStatus(win32service.SERVICE_STOP_PENDING)
            win32event.SetEvent(self.stop_event)
            if self.process and self.process.poll() is None:
                self.process.terminate()

        def SvcDoRun(self):
            servicemanager.LogMsg(
                servicemanager.EVENTLOG_INFORMATION_TYPE,
                servicemanager.PYS_SERVICE_STARTED,
                (self._svc_name_, ""),
            )
            self.process = subprocess.Popen(command, shell=True)
            self.process.wait()

    servicemanager.Initialize(service_name, None)
    servicemanager.PrepareToHostSingle(CommandService)
    try:
        servicemanager.StartServiceCtrlDispatcher()
    except pywintypes.error as e:
        if e.winerror != ERROR_FAILED_SERVICE_CONTROLLER_CONNECT:
            raise
        logger.info("Not started by the SCM, running %s in the foreground", command)
        raise typer.Exit(subprocess.call(command, shell=True)) from None


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True}
)
def main(
    service_name: Annotated[
        str, typer.Option("--service-name", help="Name registered with sc.exe")
    ],
    command: Annotated[
        list[str], typer.Argument(help="Command to run as the service")
    ],
) -> None:
    """Run COMMAND as the Windows service SERVICE_NAME."""
    run_as_service(service_name, " ".join(command))


if __name__ == "__main__":
    app()
