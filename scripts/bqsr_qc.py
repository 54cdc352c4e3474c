#!/usr/bin/env python -Es
"""Compare base quality scores before and after GATK recalibration.

Runs BaseRecalibrator, ApplyBQSR, BaseRecalibrator on the recalibrated BAM
and AnalyzeCovariates for a single sample, then writes a summary report.

Usage:
  bqsr_qc.py run <config.yaml> [--resume] [--workdir DIR]
  bqsr_qc.py paths <config.yaml>
  bqsr_qc.py submit <config.yaml> [--dry-run] [-o script.sbatch]

An example configuration is in 'config/bqsr_qc-sample.yaml'.
"""
import sys

from bqsrqc.pipeline import main

if __name__ == "__main__":
    sys.exit(main.main(sys.argv[1:]))
