"""Retrieve run information describing the sample to recalibrate.

Builds the run `data` dictionary from a loaded YAML configuration, naming
all output files from the sample name and output directory.
"""
import collections
import copy
import os

from bqsrqc.pipeline import datadict as dd

OUTPUT_NAMES = collections.OrderedDict([
    ("before_table", "%s_BEFORE_recal.table"),
    ("recal_bam", "%s_recalibrated.bam"),
    ("after_table", "%s_AFTER_recal.table"),
    ("plots", "%s_recalibration_comparison.pdf"),
    ("summary", "%s_BQSR_summary.txt"),
])

REQUIRED = ["sample_name", "align_bam", "ref_file", "known_sites"]

def get_output_files(sample_name, out_dir):
    """Output files for a sample, in the order the pipeline produces them.
    """
    return collections.OrderedDict((k, os.path.join(out_dir, pattern % sample_name))
                                   for k, pattern in OUTPUT_NAMES.items())

def organize(config):
    """Prepare the run information dictionary from a loaded configuration.
    """
    data = copy.deepcopy(config)
    data["known_sites"] = _normalize_known_sites(data.get("known_sites"))
    use_existing = _use_existing(data)
    required = [k for k in REQUIRED if not (use_existing and k == "align_bam")]
    missing = [k for k in required if not getattr(dd, "get_%s" % k)(data)]
    if missing:
        raise ValueError("Missing required configuration values: %s" %
                         ", ".join(".".join(dd.get_keys(k)) for k in missing))
    data["sample_name"] = str(dd.get_sample_name(data))
    data = dd.set_out_dir(data, dd.get_out_dir(data))
    data["outputs"] = get_output_files(dd.get_sample_name(data), dd.get_out_dir(data))
    if use_existing:
        data["outputs"]["before_table"] = dd.get_existing_before_table(data)
        data["outputs"]["recal_bam"] = dd.get_existing_recal_bam(data)
    data["config"] = config
    return data

def _normalize_known_sites(known_sites):
    """Known sites may be a list of VCFs or a mapping of names to VCFs.
    """
    if not known_sites:
        return []
    elif isinstance(known_sites, dict):
        known_sites = list(known_sites.values())
    elif not isinstance(known_sites, (list, tuple)):
        known_sites = [known_sites]
    return [str(x) for x in known_sites if x]

def _use_existing(data):
    """Check for a previously recalibrated BAM and BEFORE table to compare against.
    """
    recal_bam = dd.get_existing_recal_bam(data)
    before_table = dd.get_existing_before_table(data)
    if bool(recal_bam) != bool(before_table):
        raise ValueError("Comparing existing files requires both existing.recal_bam "
                         "and existing.before_table, found: %s" % data.get("existing"))
    return bool(recal_bam)

def is_existing_run(data):
    """Are we starting from an existing recalibrated BAM and BEFORE table?
    """
    return dd.is_set_existing_recal_bam(data)

def check_inputs(data):
    """Ensure all input files are present before running any tools.
    """
    to_check = [("Reference genome", dd.get_ref_file(data))]
    to_check += [("Known sites", x) for x in dd.get_known_sites(data)]
    if is_existing_run(data):
        to_check += [("Existing recalibrated BAM", dd.get_existing_recal_bam(data)),
                     ("Existing BEFORE table", dd.get_existing_before_table(data))]
    else:
        to_check.append(("Original BAM", dd.get_align_bam(data)))
    for descr, fname in to_check:
        if not os.path.exists(fname):
            raise ValueError("%s file not found: %s" % (descr, fname))
    return data
