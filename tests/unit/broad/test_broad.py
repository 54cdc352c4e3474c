import pytest

from bqsrqc import broad


@pytest.fixture
def runner(fake_gatk):
    return broad.GATKRunner({"resources": {"gatk": {"cmd": fake_gatk["cmd"]}}})


def test_get_gatk_opts_defaults():
    assert broad.get_gatk_opts({}) == broad.DEFAULT_JVM_OPTS


def test_get_gatk_opts_from_resources():
    config = {"resources": {"gatk": {"jvm_opts": "-Xms1g -Xmx8g"}}}
    assert broad.get_gatk_opts(config, "/tmp/tx") == ["-Xms1g", "-Xmx8g", "-Djava.io.tmpdir=/tmp/tx"]


def test_cl_gatk(runner, fake_gatk):
    cl = runner.cl_gatk("ApplyBQSR", ["-I", "in.bam", "-O", "out.bam"])
    assert cl == [fake_gatk["cmd"], "--java-options",
                  "-Xmx60G -XX:+UseParallelGC -XX:ParallelGCThreads=8",
                  "ApplyBQSR", "-I", "in.bam", "-O", "out.bam"]


def test_run_gatk_checks_output(runner, mocker):
    run = mocker.patch("bqsrqc.broad.do.run")
    runner.run_gatk("BaseRecalibrator", ["-O", "out.table"], "Before table", "out.table",
                    data={"sample_name": "sample1"})
    args, kwargs = run.call_args
    assert args[0][3] == "BaseRecalibrator"
    assert args[1] == "Before table"
    assert args[2] == {"sample_name": "sample1"}
    assert len(kwargs["checks"]) == 1


def test_run_gatk_executes_tool(runner, fake_gatk, tmp_path):
    out_file = str(tmp_path / "out.table")
    runner.run_gatk("BaseRecalibrator", ["-O", out_file], out_file=out_file)
    with open(fake_gatk["calls"]) as in_handle:
        assert in_handle.read().strip() == "BaseRecalibrator"
    with open(out_file) as in_handle:
        assert in_handle.read().strip() == "BaseRecalibrator output"
