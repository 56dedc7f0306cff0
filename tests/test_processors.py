from pathlib import Path

import pysam
import pytest

from genocoord.models import ContigInfo, Variant
from genocoord.processors import ReadFilterProcessor, VariantSortProcessor
from genocoord.utils.config import ReadRequirements
from genocoord.utils.info import get_info_field
from genocoord.utils.ranges import contigs_from_header

HEADER = {
    'HD': {'VN': '1.6', 'SO': 'unsorted'},
    'SQ': [{'SN': 'chr1', 'LN': 10000}, {'SN': 'chr2', 'LN': 10000}],
}

# name -> (flag, reference_id, start, mapq, next_reference_id)
READS = {
    'good': (0, 0, 100, 60, -1),
    'low_mapq': (0, 0, 200, 5, -1),
    'duplicate': (1024, 0, 300, 60, -1),
    'secondary': (256, 1, 400, 60, -1),
    'mate_elsewhere': (1 | 64, 0, 500, 60, 1),
    'mate_same_contig': (1 | 64, 1, 600, 60, 1),
    'unmapped': (4, -1, -1, 0, -1),
}


@pytest.fixture
def sam_file(tmp_path) -> Path:
    """Write a small SAM file covering each read filter."""
    path = tmp_path / "reads.sam"
    with pysam.AlignmentFile(str(path), "w", header=HEADER) as out:
        for name, (flag, ref_id, start, mapq, mate_ref_id) in READS.items():
            segment = pysam.AlignedSegment(out.header)
            segment.query_name = name
            segment.query_sequence = "ACGTACGTAC"
            segment.flag = flag
            segment.reference_id = ref_id
            segment.reference_start = start
            segment.mapping_quality = mapq
            if ref_id >= 0:
                segment.cigarstring = "10M"
            segment.next_reference_id = mate_ref_id
            segment.next_reference_start = start + 300 if mate_ref_id >= 0 else -1
            out.write(segment)
    return path


def test_filter_reads_default_requirements(sam_file):
    with ReadFilterProcessor(sam_file) as read_proc:
        kept = [segment.query_name for segment in read_proc.filter_reads()]
    assert kept == ['good', 'low_mapq', 'mate_same_contig']
    assert read_proc.n_kept == 3
    assert read_proc.n_rejected == 4


def test_filter_reads_custom_requirements(sam_file):
    reqs = ReadRequirements(min_mapping_quality=20, keep_duplicates=True, keep_unaligned=True)
    with ReadFilterProcessor(sam_file, reqs) as read_proc:
        kept = [segment.query_name for segment in read_proc.filter_reads()]
    assert kept == ['good', 'duplicate', 'mate_same_contig', 'unmapped']


def test_filter_reads_test_mode(sam_file):
    with ReadFilterProcessor(sam_file, test_mode=2) as read_proc:
        kept = [segment.query_name for segment in read_proc.filter_reads()]
    assert kept == ['good', 'low_mapq']


def test_write_filtered(sam_file, tmp_path):
    output = tmp_path / "filtered.sam"
    seen = []
    with ReadFilterProcessor(sam_file) as read_proc:
        n_written = read_proc.write_filtered(output, on_read=lambda: seen.append(1))
    assert n_written == 3
    assert len(seen) == 3

    with pysam.AlignmentFile(str(output), "r") as result:
        assert [segment.query_name for segment in result.fetch(until_eof=True)] == ['good', 'low_mapq', 'mate_same_contig']


def test_read_processor_requires_context(sam_file):
    read_proc = ReadFilterProcessor(sam_file)
    with pytest.raises(RuntimeError):
        list(read_proc.filter_reads())


@pytest.fixture
def bam_with_colon_contig(tmp_path) -> Path:
    """Coordinate-sorted BAM whose second contig name contains a colon."""
    path = tmp_path / "hla.bam"
    header = {
        'HD': {'VN': '1.6', 'SO': 'coordinate'},
        'SQ': [{'SN': 'chr1', 'LN': 1000}, {'SN': 'HLA-A*01:01', 'LN': 1000}],
    }
    reads = [('chr1_a', 0, 10), ('chr1_b', 0, 200), ('hla_a', 1, 0), ('hla_b', 1, 50)]
    with pysam.AlignmentFile(str(path), "wb", header=header) as out:
        for name, ref_id, start in reads:
            segment = pysam.AlignedSegment(out.header)
            segment.query_name = name
            segment.query_sequence = "ACGTACGTAC"
            segment.reference_id = ref_id
            segment.reference_start = start
            segment.mapping_quality = 60
            segment.cigarstring = "10M"
            out.write(segment)
    return path


def test_filter_reads_region_contig_name_with_colon(bam_with_colon_contig):
    with ReadFilterProcessor(bam_with_colon_contig) as read_proc:
        kept = [segment.query_name for segment in read_proc.filter_reads(region="HLA-A*01:01")]
    assert kept == ['hla_a', 'hla_b']
    assert Path(str(bam_with_colon_contig) + ".bai").exists()


def test_filter_reads_region_interval(bam_with_colon_contig):
    with ReadFilterProcessor(bam_with_colon_contig) as read_proc:
        kept = [segment.query_name for segment in read_proc.filter_reads(region="chr1:1-100")]
    assert kept == ['chr1_a']


def test_contigs_from_alignment_header(sam_file):
    with ReadFilterProcessor(sam_file) as read_proc:
        contigs = contigs_from_header(read_proc.header)
    assert contigs == [ContigInfo('chr1', 10000, 0), ContigInfo('chr2', 10000, 1)]


VCF_CONTENT = """##fileformat=VCFv4.2
##contig=<ID=chr2,length=10000>
##contig=<ID=chr1,length=10000>
##INFO=<ID=DP,Number=1,Type=Integer,Description="Total depth">
##INFO=<ID=AF,Number=A,Type=Float,Description="Allele frequency">
##INFO=<ID=SRC,Number=1,Type=String,Description="Source">
##INFO=<ID=SOMATIC,Number=0,Type=Flag,Description="Somatic">
##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">
##FORMAT=<ID=GQ,Number=1,Type=Integer,Description="Genotype quality">
#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tSAMPLE
chr1\t100\tv1\tA\tG\t50\tPASS\tDP=10;AF=0.5;SRC=caller\tGT:GQ\t0/1:30
chr2\t500\tv2\tC\tT\t50\tPASS\tDP=12\tGT:GQ\t1/1:40
chr1\t100\tv3\tAC\tA\t50\tPASS\tDP=8;SOMATIC\tGT:GQ\t./1:20
chr2\t20\tv4\tG\tA,C\t50\tPASS\tAF=0.2,0.1\tGT:GQ\t1/2:10
"""


@pytest.fixture
def vcf_file(tmp_path) -> Path:
    path = tmp_path / "unsorted.vcf"
    path.write_text(VCF_CONTENT)
    return path


def test_variant_from_pysam_record(vcf_file):
    with pysam.VariantFile(str(vcf_file)) as vcf:
        records = list(vcf)

    variant = Variant.from_pysam_record(records[0])
    assert (variant.reference_name, variant.start, variant.end) == ("chr1", 99, 100)
    assert variant.reference_bases == "A"
    assert variant.alternate_bases == ["G"]
    assert variant.names == ["v1"]
    assert get_info_field("DP", variant, int) == [10]
    assert get_info_field("AF", variant, float) == pytest.approx([0.5])
    assert get_info_field("SRC", variant, str) == ["caller"]
    assert variant.calls[0].call_set_name == "SAMPLE"
    assert variant.calls[0].genotype == [0, 1]
    assert get_info_field("GQ", variant.calls[0], int) == [30]

    deletion = Variant.from_pysam_record(records[2])
    assert (deletion.start, deletion.end) == (99, 101)
    assert deletion.calls[0].genotype == [-1, 1]
    assert "SOMATIC" not in deletion.info

    multiallelic = Variant.from_pysam_record(records[3])
    assert multiallelic.alternate_bases == ["A", "C"]
    # Type=Float values are single precision
    assert get_info_field("AF", multiallelic, float) == pytest.approx([0.2, 0.1])


def test_sort_uses_header_contig_order(vcf_file):
    with VariantSortProcessor(vcf_file) as vcf_proc:
        assert vcf_proc.contig_rank() == {"chr2": 0, "chr1": 1}
        records = vcf_proc.sorted_records()
    assert [record.id for record in records] == ["v4", "v2", "v1", "v3"]


def test_contigs_from_variant_header(vcf_file):
    with pysam.VariantFile(str(vcf_file)) as vcf:
        contigs = contigs_from_header(vcf.header)
    assert contigs == [ContigInfo('chr2', 10000, 0), ContigInfo('chr1', 10000, 1)]


def test_write_sorted(vcf_file, tmp_path):
    output = tmp_path / "sorted.vcf"
    with VariantSortProcessor(vcf_file) as vcf_proc:
        assert vcf_proc.write_sorted(output) == 4

    with pysam.VariantFile(str(output)) as vcf:
        assert [record.id for record in vcf] == ["v4", "v2", "v1", "v3"]


def test_write_sorted_compressed(vcf_file, tmp_path):
    output = tmp_path / "sorted.vcf.gz"
    with VariantSortProcessor(vcf_file) as vcf_proc:
        vcf_proc.write_sorted(output)
    assert Path(str(output) + ".tbi").exists()

    with pysam.VariantFile(str(output)) as vcf:
        assert [record.id for record in vcf.fetch("chr1")] == ["v1", "v3"]


def test_vcf_processor_requires_context(vcf_file):
    with pytest.raises(RuntimeError):
        VariantSortProcessor(vcf_file).sorted_records()
