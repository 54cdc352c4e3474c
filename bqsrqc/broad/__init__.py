"""Work with Broad's GATK toolkit from Python.

Builds GATK4 command lines from the configuration and runs them through
the logged command runner.
"""
from bqsrqc.pipeline import config_utils
from bqsrqc.provenance import do

DEFAULT_JVM_OPTS = ["-Xmx60G", "-XX:+UseParallelGC", "-XX:ParallelGCThreads=8"]

def get_default_jvm_opts(tmp_dir=None):
    """Retrieve default JVM options, pointing Java temporary files at tmp_dir.
    """
    opts = []
    if tmp_dir:
        opts.append("-Djava.io.tmpdir=%s" % tmp_dir)
    return opts

def get_gatk_opts(config, tmp_dir=None):
    """Retrieve GATK JVM memory and garbage collection options.
    """
    resources = config_utils.get_resources("gatk", config)
    jvm_opts = resources.get("jvm_opts") or DEFAULT_JVM_OPTS
    if isinstance(jvm_opts, str):
        jvm_opts = jvm_opts.split()
    return [str(x) for x in jvm_opts] + get_default_jvm_opts(tmp_dir)

class GATKRunner:
    """Simplify running GATK4 commandline tools.
    """
    def __init__(self, config):
        self._config = config
        self._gatk_cmd = None

    def gatk_cmd(self):
        """Path to the gatk wrapper, resolved on first use.
        """
        if self._gatk_cmd is None:
            self._gatk_cmd = config_utils.get_program("gatk", self._config)
        return self._gatk_cmd

    def cl_gatk(self, tool, params, tmp_dir=None):
        """Prepare a GATK commandline for the given tool and parameters.
        """
        jvm_opts = get_gatk_opts(self._config, tmp_dir)
        return [self.gatk_cmd(), "--java-options", " ".join(jvm_opts), tool] + \
            [str(x) for x in params]

    def run_gatk(self, tool, params, descr=None, out_file=None, tmp_dir=None, data=None):
        """Run a GATK tool, checking it produced a non-empty out_file.
        """
        cl = self.cl_gatk(tool, params, tmp_dir)
        checks = [do.file_nonempty(out_file)] if out_file else None
        do.run(cl, descr or "GATK: %s" % tool, data, checks=checks)

def runner_from_config(config):
    return GATKRunner(config)
