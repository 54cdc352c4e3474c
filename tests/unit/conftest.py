"""Pytest fixtures and test helper functions"""

import os

import pytest
import yaml

FAKE_GATK = """#!/bin/sh
if [ "$1" = "--java-options" ]; then
    shift 2
fi
tool="$1"
shift
echo "$tool" >> "$FAKE_GATK_CALLS"
ncalls=$(wc -l < "$FAKE_GATK_CALLS" | tr -d " ")
if [ "$tool" = "$FAKE_GATK_FAIL" ] || [ "$ncalls" = "$FAKE_GATK_FAIL_CALL" ]; then
    echo "A USER ERROR has occurred: $tool failed"
    exit 2
fi
while [ $# -gt 0 ]; do
    case "$1" in
        -O|-plots)
            echo "$tool output" > "$2"
            shift 2
            ;;
        *)
            shift
            ;;
    esac
done
"""


def touch(fname, contents="test\n"):
    with open(fname, "w") as out_handle:
        out_handle.write(contents)
    return fname


def read_calls(calls_file):
    if not os.path.exists(calls_file):
        return []
    with open(calls_file) as in_handle:
        return [x.strip() for x in in_handle if x.strip()]


@pytest.fixture
def fake_gatk(tmp_path, monkeypatch):
    """Stand in gatk executable that records tools called and writes outputs.

    Set FAKE_GATK_FAIL to a tool name to make that tool exit with an error,
    or FAKE_GATK_FAIL_CALL to a number to fail only that call (1-based).
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    gatk = str(bin_dir / "gatk")
    touch(gatk, FAKE_GATK)
    os.chmod(gatk, 0o755)
    calls_file = str(tmp_path / "gatk_calls.txt")
    monkeypatch.setenv("FAKE_GATK_CALLS", calls_file)
    monkeypatch.delenv("FAKE_GATK_FAIL", raising=False)
    monkeypatch.delenv("FAKE_GATK_FAIL_CALL", raising=False)
    return {"cmd": gatk, "calls": calls_file}


@pytest.fixture
def inputs(tmp_path):
    in_dir = tmp_path / "inputs"
    in_dir.mkdir()
    return {"align_bam": touch(str(in_dir / "original.bam")),
            "ref": touch(str(in_dir / "genome.fa")),
            "known_sites": [touch(str(in_dir / "dbsnp.vcf")),
                            touch(str(in_dir / "known_indels.vcf.gz"))]}


@pytest.fixture
def sample_config(tmp_path, inputs, fake_gatk):
    """Configuration dictionary for a run using the fake gatk.
    """
    return {"sample_name": "sample1",
            "align_bam": inputs["align_bam"],
            "out_dir": str(tmp_path / "out"),
            "reference": {"fasta": inputs["ref"]},
            "known_sites": inputs["known_sites"],
            "log_dir": str(tmp_path / "log"),
            "resources": {"gatk": {"cmd": fake_gatk["cmd"],
                                   "jvm_opts": ["-Xmx2g"]},
                          "tmp": {"dir": str(tmp_path / "tx")}}}


@pytest.fixture
def write_config(tmp_path):
    def _write(config, name="bqsr_qc.yaml"):
        config_file = str(tmp_path / name)
        with open(config_file, "w") as out_handle:
            yaml.safe_dump(config, out_handle, default_flow_style=False)
        return config_file
    return _write
