"""Write a text report describing a finished recalibration comparison.
"""
import datetime
import os

from bqsrqc.distributed.transaction import file_transaction
from bqsrqc.log import logger
from bqsrqc.pipeline import datadict as dd
from bqsrqc.pipeline import run_info

TEMPLATE = """COMPLETE BQSR ANALYSIS SUMMARY
==============================
Generated on: {date}
Sample: {sample}

WORKFLOW OVERVIEW:
1. BaseRecalibrator (original BAM) -> BEFORE table
2. ApplyBQSR (apply recalibration) -> recalibrated BAM
3. BaseRecalibrator (recalibrated BAM) -> AFTER table
4. AnalyzeCovariates (compare tables) -> comparison plots
{existing}
INPUT FILES:
- Original BAM: {align_bam}
- Reference genome: {ref_file}
- Known sites:
{known_sites}

OUTPUT FILES:
- BEFORE recalibration table: {before_table}
- Recalibrated BAM: {recal_bam}
- AFTER recalibration table: {after_table}
- Comparison plots: {plots}
- This summary: {summary}

WHAT TO DO NEXT:
1. Review the comparison plots PDF to assess BQSR effectiveness
2. Look for convergence between before/after quality scores
3. If recalibration looks good, use the recalibrated BAM for variant calling
4. The recalibrated BAM should show improved base quality accuracy

INTERPRETATION:
- The plots should show that quality scores are more accurate after recalibration
- Look for flattening of the quality score distributions
- Residual errors should be minimal in the "after" plots
"""

EXISTING_NOTE = """
Steps 1 and 2 were not run: the BEFORE table and recalibrated BAM
were supplied from a previous recalibration.
"""

def format_summary(data, when=None):
    if when is None:
        when = datetime.datetime.now()
    return TEMPLATE.format(
        date=when.strftime("%a %b %d %H:%M:%S %Y"),
        sample=dd.get_sample_name(data),
        existing=EXISTING_NOTE if run_info.is_existing_run(data) else "",
        align_bam=dd.get_align_bam(data) or "not used",
        ref_file=dd.get_ref_file(data),
        known_sites="\n".join("  - %s" % x for x in dd.get_known_sites(data)),
        before_table=dd.get_before_table(data),
        recal_bam=dd.get_recal_bam(data),
        after_table=dd.get_after_table(data),
        plots=dd.get_plots(data),
        summary=dd.get_summary(data))

def write_summary(data, when=None):
    """Write the summary report for a run where all stages succeeded.
    """
    out_file = dd.get_summary(data)
    with file_transaction(data, out_file) as tx_out_file:
        with open(tx_out_file, "w") as out_handle:
            out_handle.write(format_summary(data, when))
    logger.info("Summary report written to %s" % out_file)
    return out_file

def log_generated_files(data):
    """Report the final set of generated files at the end of a run.
    """
    logger.info("=================================================")
    logger.info("COMPLETE BQSR PIPELINE FINISHED SUCCESSFULLY!")
    logger.info("=================================================")
    logger.info("GENERATED FILES:")
    labels = ["BEFORE table", "Recalibrated BAM", "AFTER table",
              "Comparison plots", "Summary report"]
    for i, (label, key) in enumerate(zip(labels, run_info.OUTPUT_NAMES.keys())):
        logger.info("%s. %s: %s" % (i + 1, label, os.path.normpath(data["outputs"][key])))
