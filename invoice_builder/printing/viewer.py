import logging

logger = logging.getLogger(__name__)


def open_file(path):
        import sys, os, subprocess
        if sys.platform == "win32":
                try:
                        os.startfile(path)
                        return True
                except OSError:
                        logger.exception("Failed to open file: %s", path)
                        return False
        opener = "open" if sys.platform == "darwin" else "xdg-open"
        try:
                subprocess.Popen([opener, path])
                return True
        except OSError:
                logger.exception("Failed to open file: %s", path)
                return False
