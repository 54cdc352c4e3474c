from bqsrqc.pipeline import datadict as dd


def test_get_ref_file():
    data = {"reference": {"fasta": "/refs/genome.fa"}}
    assert dd.get_ref_file(data) == "/refs/genome.fa"


def test_get_out_dir_default():
    assert dd.get_out_dir({}) == dd.DEFAULT_OUT_DIR
    assert dd.get_out_dir({"out_dir": "/results"}) == "/results"


def test_get_known_sites_always_list():
    assert dd.get_known_sites({}) == []
    assert dd.get_known_sites({"known_sites": "/refs/dbsnp.vcf"}) == ["/refs/dbsnp.vcf"]
    assert dd.get_known_sites({"known_sites": ["a.vcf", "b.vcf"]}) == ["a.vcf", "b.vcf"]


def test_set_and_is_set():
    data = dd.set_sample_name({}, "sample1")
    assert dd.get_sample_name(data) == "sample1"
    assert dd.is_set_sample_name(data)
    assert not dd.is_set_existing_recal_bam(data)


def test_get_tmp_dir():
    data = {"config": {"resources": {"tmp": {"dir": "/scratch"}}}}
    assert dd.get_tmp_dir(data) == "/scratch"


def test_get_keys():
    assert dd.get_keys("ref_file") == ["reference", "fasta"]
