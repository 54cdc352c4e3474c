"""File handling helpers shared by the pipeline stages.
"""
import os
import shutil
import time


def safe_makedir(dname):
    """Create dname and any parents, tolerating another job creating it first.
    """
    if not dname:
        return dname
    for attempt in range(6):
        if os.path.exists(dname):
            break
        try:
            os.makedirs(dname)
        except OSError:
            # shared filesystems can report a failure while a concurrent
            # job creates the same directory
            if attempt == 5:
                raise
            time.sleep(2)
    return dname

def file_exists(fname):
    """True when fname names a file with content.
    """
    try:
        return bool(fname) and os.path.getsize(fname) > 0
    except OSError:
        return False

def remove_safe(fname):
    """Remove a file or directory tree, ignoring ones already gone.
    """
    if os.path.isdir(fname):
        shutil.rmtree(fname, ignore_errors=True)
    elif os.path.lexists(fname):
        os.remove(fname)

def get_abspath(path, pardir=None):
    path = os.path.expandvars(path)
    return os.path.normpath(os.path.join(pardir or os.getcwd(), path))
