"""Write stage outputs through a temporary directory, publishing them on success.

A stage writes its output inside a scratch directory and the file moves to
its final path only once the block finishes without error. A stage that
fails never leaves a partial file at its final path.
"""
import contextlib
import os
import shutil
import tempfile

import toolz as tz

from bqsrqc import utils


DEFAULT_TMP = 'bqsrqctx'


@contextlib.contextmanager
def tx_tmpdir(data=None, base_dir=None):
    """Provide a scratch directory, removed when the block exits.

    The scratch area is `resources: tmp: dir` from the configuration or,
    when unset, a `bqsrqctx` directory under base_dir (default: the current
    working directory). The default area is removed again once empty.

    data can be the full run information or a configuration dictionary.
    """
    configured = _configured_tmpdir(data)
    tmpdir_base = utils.get_abspath(configured or os.path.join(base_dir or os.getcwd(), DEFAULT_TMP))
    utils.safe_makedir(tmpdir_base)
    tmp_dir = tempfile.mkdtemp(dir=tmpdir_base)
    try:
        yield tmp_dir
    finally:
        utils.remove_safe(tmp_dir)
        if not configured:
            _remove_if_empty(tmpdir_base)


def _configured_tmpdir(data):
    return (tz.get_in(("config", "resources", "tmp", "dir"), data) or
            tz.get_in(("resources", "tmp", "dir"), data))


def _remove_if_empty(dname):
    # another run sharing the working directory may still be using it
    if os.path.isdir(dname) and not os.listdir(dname):
        try:
            os.rmdir(dname)
        except OSError:
            pass


@contextlib.contextmanager
def file_transaction(data, out_file):
    """Yield a temporary name for out_file, moving it into place on success.

    data is the run information or configuration used to find the scratch
    area, or None to use the default.
    """
    with tx_tmpdir(data) as tmp_dir:
        tx_file = os.path.join(tmp_dir, os.path.basename(out_file))
        yield tx_file
        if os.path.exists(tx_file):
            _publish(tx_file, out_file)


def _publish(tx_file, final_file):
    """Move a finished file into place, checking the whole file arrived.

    The scratch area may sit on a different filesystem than the outputs, in
    which case the move is a copy. A `.bqsrqctmp` marker sits beside the
    final file while the copy is in progress.
    """
    utils.safe_makedir(os.path.dirname(final_file))
    marker = final_file + ".bqsrqctmp"
    open(marker, 'wb').close()
    want_size = os.path.getsize(tx_file)
    shutil.move(tx_file, final_file)
    got_size = os.path.getsize(final_file)
    if want_size != got_size:
        raise IOError("Incomplete transfer of %s to %s: expected %s bytes, found %s"
                      % (tx_file, final_file, want_size, got_size))
    utils.remove_safe(marker)
