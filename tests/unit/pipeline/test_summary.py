import datetime
import os

from bqsrqc.pipeline import run_info, summary


WHEN = datetime.datetime(2024, 3, 5, 14, 30, 0)


def test_format_summary_lists_inputs_and_outputs(sample_config):
    data = run_info.organize(sample_config)
    text = summary.format_summary(data, WHEN)
    assert text.startswith("COMPLETE BQSR ANALYSIS SUMMARY")
    assert "Generated on: Tue Mar 05 14:30:00 2024" in text
    assert "Sample: sample1" in text
    assert "- Original BAM: %s" % sample_config["align_bam"] in text
    assert "- Reference genome: %s" % sample_config["reference"]["fasta"] in text
    for known in sample_config["known_sites"]:
        assert "  - %s" % known in text
    for fname in data["outputs"].values():
        assert fname in text
    assert "Steps 1 and 2 were not run" not in text


def test_format_summary_existing_run(sample_config):
    sample_config["existing"] = {"recal_bam": "/prev/s.bam", "before_table": "/prev/s.table"}
    text = summary.format_summary(run_info.organize(sample_config), WHEN)
    assert "Steps 1 and 2 were not run" in text
    assert "- Recalibrated BAM: /prev/s.bam" in text


def test_write_summary(sample_config):
    data = run_info.organize(sample_config)
    os.makedirs(sample_config["out_dir"])
    out_file = summary.write_summary(data, WHEN)
    assert out_file == data["outputs"]["summary"]
    with open(out_file) as in_handle:
        assert in_handle.read() == summary.format_summary(data, WHEN)
    assert os.listdir(sample_config["out_dir"]) == ["sample1_BQSR_summary.txt"]
