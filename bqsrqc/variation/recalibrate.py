"""Perform quality score recalibration steps with the GATK toolkit.

BaseRecalibrator builds a table of empirical error rates by covariate,
masking known variant sites. ApplyBQSR rewrites quality scores from that
table and AnalyzeCovariates plots two tables against each other.

https://gatk.broadinstitute.org/hc/en-us/articles/360035890531-Base-Quality-Score-Recalibration-BQSR
"""
import os

from bqsrqc.distributed.transaction import file_transaction

def base_recalibrator(broad_runner, in_bam, ref_file, known_sites, out_file, data=None,
                      descr="BaseRecalibrator"):
    """Produce a recalibration table of covariates from an input BAM.
    """
    with file_transaction(data, out_file) as tx_out_file:
        params = ["-R", ref_file, "-I", in_bam]
        for sites in known_sites:
            params += ["--known-sites", sites]
        params += ["-O", tx_out_file]
        broad_runner.run_gatk("BaseRecalibrator", params, descr, tx_out_file,
                              tmp_dir=os.path.dirname(tx_out_file), data=data)
    return out_file

def apply_bqsr(broad_runner, in_bam, ref_file, recal_table, out_file, data=None):
    """Apply a recalibration table to a BAM, producing a recalibrated BAM.

    The BAM index is not written so the output directory only holds the
    pipeline's named outputs.
    """
    with file_transaction(data, out_file) as tx_out_file:
        params = ["-R", ref_file, "-I", in_bam,
                  "--bqsr-recal-file", recal_table,
                  "-O", tx_out_file,
                  "--create-output-bam-index", "false"]
        broad_runner.run_gatk("ApplyBQSR", params, "ApplyBQSR", tx_out_file,
                              tmp_dir=os.path.dirname(tx_out_file), data=data)
    return out_file

def analyze_covariates(broad_runner, before_table, after_table, out_file, data=None):
    """Compare BEFORE and AFTER recalibration tables, plotting to a PDF.
    """
    with file_transaction(data, out_file) as tx_out_file:
        params = ["-before", before_table, "-after", after_table, "-plots", tx_out_file]
        broad_runner.run_gatk("AnalyzeCovariates", params, "AnalyzeCovariates", tx_out_file,
                              tmp_dir=os.path.dirname(tx_out_file), data=data)
    return out_file
