"""Main entry point for the before and after recalibration comparison.

Runs four GATK stages in a fixed order, each gated on the success of the
previous one, then writes a summary report:

  1. BaseRecalibrator on the original BAM -> BEFORE table
  2. ApplyBQSR with the BEFORE table -> recalibrated BAM
  3. BaseRecalibrator on the recalibrated BAM -> AFTER table
  4. AnalyzeCovariates on both tables -> comparison plots

The first failing stage stops the run.
"""
import argparse
import collections
import os
import subprocess

import yaml

from bqsrqc import broad, log, utils
from bqsrqc.distributed import slurm
from bqsrqc.log import logger
from bqsrqc.pipeline import config_utils, run_info, summary, version
from bqsrqc.pipeline import datadict as dd
from bqsrqc.variation import recalibrate


class StageFailed(Exception):
    """A pipeline stage exited with a non-zero status or did not produce output.
    """
    def __init__(self, stage, descr):
        self.stage = stage
        self.descr = descr
        super(StageFailed, self).__init__("STEP %s failed - %s" % (stage, descr))

Stage = collections.namedtuple("Stage", ["number", "descr", "output", "fn"])

def _before_table(runner, data):
    return recalibrate.base_recalibrator(runner, dd.get_align_bam(data), dd.get_ref_file(data),
                                         dd.get_known_sites(data), dd.get_before_table(data), data,
                                         "BaseRecalibrator (before table)")

def _apply_bqsr(runner, data):
    return recalibrate.apply_bqsr(runner, dd.get_align_bam(data), dd.get_ref_file(data),
                                  dd.get_before_table(data), dd.get_recal_bam(data), data)

def _after_table(runner, data):
    return recalibrate.base_recalibrator(runner, dd.get_recal_bam(data), dd.get_ref_file(data),
                                         dd.get_known_sites(data), dd.get_after_table(data), data,
                                         "BaseRecalibrator (after table)")

def _analyze_covariates(runner, data):
    return recalibrate.analyze_covariates(runner, dd.get_before_table(data), dd.get_after_table(data),
                                          dd.get_plots(data), data)

STAGES = [Stage(1, "BaseRecalibrator (before table)", "before_table", _before_table),
          Stage(2, "ApplyBQSR", "recal_bam", _apply_bqsr),
          Stage(3, "BaseRecalibrator (after table)", "after_table", _after_table),
          Stage(4, "AnalyzeCovariates", "plots", _analyze_covariates)]

# stages replaced by files from a previous recalibration
EXISTING_STAGES = set([1, 2])

def run_stages(data, resume=False, runner=None):
    """Run each stage in order, stopping at the first failure.
    """
    if runner is None:
        runner = broad.runner_from_config(dd.get_config(data))
    for stage in STAGES:
        out_file = data["outputs"][stage.output]
        if run_info.is_existing_run(data) and stage.number in EXISTING_STAGES:
            logger.info("STEP %s skipped: using existing %s" % (stage.number, out_file))
            continue
        if resume and utils.file_exists(out_file):
            logger.info("STEP %s skipped: output exists at %s" % (stage.number, out_file))
            continue
        logger.info("STEP %s: %s" % (stage.number, stage.descr))
        try:
            stage.fn(runner, data)
        except config_utils.CmdNotFound as e:
            # raised before do.run, which logs the other failures
            logger.error("%s: %s" % (type(e).__name__, e))
            raise StageFailed(stage.number, stage.descr) from e
        except (subprocess.CalledProcessError, IOError) as e:
            raise StageFailed(stage.number, stage.descr) from e
        logger.info("STEP %s completed: %s" % (stage.number, out_file))
    return data

def run_main(config_file, resume=False, workdir=None):
    """Run the recalibration comparison described by a YAML configuration.

    Returns the output files keyed by name. Raises StageFailed if any
    stage fails, in which case no summary report is written.
    """
    config_file = os.path.abspath(config_file)
    if workdir:
        workdir = utils.safe_makedir(os.path.abspath(workdir))
        os.chdir(workdir)
    config = config_utils.load_config(config_file)
    handler = log.setup_local_logging(config)
    try:
        data = run_info.check_inputs(run_info.organize(config))
        logger.info("Configuration: %s" % config_file)
        logger.info("Sample %s, writing outputs to %s" % (dd.get_sample_name(data),
                                                           dd.get_out_dir(data)))
        utils.safe_makedir(dd.get_out_dir(data))
        try:
            data = run_stages(data, resume)
        except StageFailed as e:
            logger.error("ERROR: %s" % e)
            raise
        summary.write_summary(data)
        summary.log_generated_files(data)
    finally:
        log.close_local_logging(handler)
    return data["outputs"]

def output_paths(config_file):
    """Retrieve the output files a configuration would produce, without running.
    """
    data = run_info.organize(config_utils.load_config(config_file))
    return data["outputs"]

def add_subparser(subparsers):
    parser = subparsers.add_parser("run", help="Run BQSR and compare before and after tables")
    parser.add_argument("config", help="YAML configuration describing the sample and references")
    parser.add_argument("--resume", action="store_true", default=False,
                        help="Skip stages whose output files already exist")
    parser.add_argument("--workdir", help="Directory to run in. Defaults to the current directory")
    parser.set_defaults(command="run")
    parser = subparsers.add_parser("paths", help="Print output file names for a configuration")
    parser.add_argument("config", help="YAML configuration describing the sample and references")
    parser.set_defaults(command="paths")

def parse_cl_args(in_args):
    description = "Before and after comparison of GATK base quality score recalibration."
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("-v", "--version", action="version", version=version.__version__)
    subparsers = parser.add_subparsers(title="commands", dest="command")
    subparsers.required = True
    add_subparser(subparsers)
    slurm.add_subparser(subparsers)
    return parser.parse_args(in_args)

def main(in_args):
    """Run the command line, returning the process exit status.
    """
    args = parse_cl_args(in_args)
    try:
        if args.command == "run":
            run_main(args.config, resume=args.resume, workdir=args.workdir)
        elif args.command == "paths":
            for fname in output_paths(args.config).values():
                print(fname)
        elif args.command == "submit":
            slurm.submit_from_config(args.config, out_file=args.outfile, dry_run=args.dry_run)
    except StageFailed:
        return 1
    except (ValueError, IOError, yaml.YAMLError, config_utils.CmdNotFound,
            subprocess.CalledProcessError) as e:
        logger.error("ERROR: %s" % e)
        return 1
    return 0
