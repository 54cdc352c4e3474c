"""Prepare and submit SLURM batch jobs running the recalibration comparison.

The batch script requests resources for the GATK processes, loads the
environment modules providing the toolkit and runs the pipeline on the
supplied configuration.
"""
import os
import sys

from bqsrqc import utils
from bqsrqc.log import logger
from bqsrqc.pipeline import config_utils
from bqsrqc.provenance import do

DEFAULTS = {"job_name": "complete_bqsr",
            "ntasks": 1,
            "cpus_per_task": 32,
            "time": "48:00:00",
            "mem": "64G",
            "partition": "cpu",
            "output": "complete_bqsr_%j.out",
            "error": "complete_bqsr_%j.err"}
DEFAULT_MODULES = ["SAMtools", "GATK"]

SCRIPT_TEMPLATE = """#!/bin/bash
#SBATCH --job-name=%(job_name)s
#SBATCH --ntasks=%(ntasks)s
#SBATCH --cpus-per-task=%(cpus_per_task)s
#SBATCH --time=%(time)s
#SBATCH --mem=%(mem)s
#SBATCH --partition=%(partition)s
#SBATCH --output=%(output)s
#SBATCH --error=%(error)s
%(extra)s
echo "Loading required modules..."
%(modules)s

%(cmd)s
"""

def _format_time(val):
    """Normalize wall clock limits, handling YAML reading 48:00:00 as seconds.
    """
    if isinstance(val, int):
        hours, rem = divmod(val, 3600)
        minutes, seconds = divmod(rem, 60)
        return "%d:%02d:%02d" % (hours, minutes, seconds)
    return str(val)

def get_slurm_opts(config):
    opts = dict(DEFAULTS)
    opts.update((k.replace("-", "_"), v) for k, v in (config.get("slurm") or {}).items())
    opts["time"] = _format_time(opts["time"])
    return opts

def _pipeline_cmd():
    local_script = os.path.join(os.path.dirname(sys.executable), "bqsr_qc.py")
    return local_script if os.path.exists(local_script) else "bqsr_qc.py"

def batch_script(config_file, config):
    """Render the batch script contents for a configuration.
    """
    opts = get_slurm_opts(config)
    modules = config.get("modules", DEFAULT_MODULES) or []
    if isinstance(modules, str):
        modules = [modules]
    extra = []
    if opts.get("account"):
        extra.append("#SBATCH --account=%s" % opts["account"])
    opts["extra"] = "\n".join(extra)
    opts["modules"] = "\n".join("module load %s" % m for m in modules)
    opts["cmd"] = "%s run %s" % (_pipeline_cmd(), os.path.abspath(config_file))
    return SCRIPT_TEMPLATE % opts

def write_batch_script(config_file, config, out_file=None):
    """Write a SLURM submission script for running the pipeline on config_file.
    """
    if out_file is None:
        out_file = "%s_bqsr_qc.sbatch" % config.get("sample_name", "bqsr_qc")
    utils.safe_makedir(os.path.dirname(os.path.abspath(out_file)))
    with open(out_file, "w") as out_handle:
        out_handle.write(batch_script(config_file, config))
    logger.info("Batch script written to %s" % out_file)
    return out_file

def submit(script):
    """Submit a batch script with sbatch, printing the job identifier.
    """
    sbatch = config_utils.get_program("sbatch", {})
    do.run([sbatch, script], "Submit SLURM batch job %s" % script, log_stdout=True)

def submit_from_config(config_file, out_file=None, dry_run=False):
    config = config_utils.load_config(config_file)
    script = write_batch_script(config_file, config, out_file)
    if not dry_run:
        submit(script)
    return script

def add_subparser(subparsers):
    parser = subparsers.add_parser("submit", help="Submit the pipeline as a SLURM batch job")
    parser.add_argument("config", help="YAML configuration describing the sample and references")
    parser.add_argument("-o", "--outfile", help="Batch script to write. Defaults to <sample>_bqsr_qc.sbatch")
    parser.add_argument("--dry-run", action="store_true", default=False,
                        help="Write the batch script without submitting it")
    parser.set_defaults(command="submit")
