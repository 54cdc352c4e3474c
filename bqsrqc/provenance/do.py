"""Run external tools as child processes, logging command lines and output.

Tool output goes to the debug log as it arrives. The tail of the output
is attached to the raised error when a tool exits non-zero.
"""
import collections
import subprocess

from bqsrqc import utils
from bqsrqc.log import logger, logger_cl, logger_stdout

# lines of tool output kept for error reports
TAIL_LINES = 100


def run(cmd, descr=None, data=None, checks=None, log_stdout=False):
    """Run a command given as an argument list, waiting for it to finish.

    Raises CalledProcessError on a non-zero exit and IOError when one of the
    post-run checks fails.
    """
    cmd = [str(x) for x in cmd]
    if descr:
        descr = _descr_str(descr, data)
        logger.debug(descr)
    logger_cl.debug(" ".join(cmd))
    try:
        _run_and_check(cmd, checks, log_stdout)
    except (subprocess.CalledProcessError, IOError):
        logger.exception("Command failed: %s" % (descr or cmd[0]))
        raise

def _descr_str(descr, data):
    if data and data.get("sample_name"):
        return "%s : %s" % (descr, data["sample_name"])
    return descr

def _run_and_check(cmd, checks, log_stdout):
    proc = subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
                            close_fds=True)
    tail = collections.deque(maxlen=TAIL_LINES)
    out_logger = logger_stdout if log_stdout else logger
    with proc.stdout:
        for raw in proc.stdout:
            line = raw.decode("utf-8", errors="replace").rstrip()
            if line:
                tail.append(line)
                out_logger.debug(line)
    returncode = proc.wait()
    if returncode != 0:
        raise subprocess.CalledProcessError(returncode, "\n".join([" ".join(cmd)] + list(tail)))
    for check in checks or []:
        if not check():
            raise IOError("%s finished without producing expected output" % cmd[0])

def file_nonempty(target_file):
    """Post-run check that a tool wrote a non-empty target_file.
    """
    def check():
        ok = utils.file_exists(target_file)
        if not ok:
            logger.info("Did not find non-empty output file %s" % target_file)
        return ok
    return check
