"""
API server launcher for TapCalc
Runs api.py next to the desktop window and stops it when the window closes
"""
import os
import subprocess
import sys
import config

API_SCRIPT = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'api.py')


class ApiServer:
    def __init__(self, script=API_SCRIPT, python=sys.executable, stop_timeout=5):
        self.script = script
        self.python = python
        self.stop_timeout = stop_timeout
        self.process = None

    @property
    def running(self):
        return self.process is not None and self.process.poll() is None

    def command(self):
        return [self.python, self.script]

    def start(self):
        """Spawn the server unless one is already up; returns True on success"""
        if self.running:
            return True
        flags = subprocess.CREATE_NEW_CONSOLE if sys.platform == 'win32' else 0
        try:
            self.process = subprocess.Popen(
                self.command(),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                creationflags=flags,
            )
        except OSError as e:
            print(f"Failed to start API server: {e}")
            self.process = None
            return False
        print(f"API server started (PID: {self.process.pid})")
        print(f"Access on this PC: http://localhost:{config.WEB_PORT}/api")
        return True

    def stop(self):
        """Terminate the server, killing it if it ignores the request"""
        process, self.process = self.process, None
        if process is None or process.poll() is not None:
            return
        process.terminate()
        try:
            process.wait(timeout=self.stop_timeout)
        except subprocess.TimeoutExpired:
            print("API server did not exit, killing it")
            process.kill()
            process.wait()
        print("API server stopped")
