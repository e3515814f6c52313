import gzip
import io

import pandas as pd
import pytest

from bedanno.annotation.pipeline import ContigStats, annotate_paths, annotate_streams, summary_frame
from bedanno.bed.io import read_bed_records
from bedanno.errors import BedannoError, EmptyInput, MalformedAttribute, OutOfOrderContig, ParseError
from bedanno.gff.io import read_gff_records

from conftest import tsv


def run_text(queries, targets, **kw):
    out = io.StringIO()
    stats = annotate_streams(
        read_bed_records(io.StringIO(queries)),
        read_gff_records(io.StringIO(targets)),
        out,
        **kw,
    )
    return out.getvalue(), stats


def test_annotate(queries_text, targets_text, expected_text):
    out, stats = run_text(queries_text, targets_text)
    assert out == expected_text
    assert [s.contig for s in stats] == ["chr1", "chr10", "chr2", "chrX", "chrM"]
    assert stats[0] == ContigStats("chr1", 4, 8, 3)


def test_output_is_deterministic(queries_text, targets_text):
    assert run_text(queries_text, targets_text)[0] == run_text(queries_text, targets_text)[0]


def test_one_output_row_per_query(queries_text, targets_text):
    out, _ = run_text(queries_text, targets_text)
    assert len(out.splitlines()) == len(queries_text.splitlines())


def test_gtf_reference():
    queries = tsv(["chr1 100 200"])
    targets = (
        'chr1\tHAVANA\tgene\t50\t400\t.\t+\t.\tgene_id "G1"; gene_name "GENE"; level 2;\n'
        'chr1\tHAVANA\ttranscript\t90\t400\t.\t+\t.\tgene_id "G1"; gene_name "TX_B"; level 2; transcript_support_level "2";\n'
        'chr1\tHAVANA\ttranscript\t90\t400\t.\t+\t.\tgene_id "G1"; gene_name "TX_A"; level 2; transcript_support_level "1";\n'
    )
    out, _ = run_text(queries, targets)
    assert out == "chr1\t100\t200\tTX_A\n"


def test_chosen_target_without_gene_name():
    out, stats = run_text(tsv(["chr1 0 10"]), tsv(["chr1 src gene 1 20 . + . ID=g1"]))
    assert out == "chr1\t0\t10\t.\n"
    assert stats[0].annotated == 1


def test_targets_for_later_contig_arrive_first():
    queries = tsv(["chr1 10 20", "chr2 10 20"])
    targets = tsv([
        "chr2 src gene 1 100 . + . gene_name=B",
        "chr1 src gene 1 100 . + . gene_name=A",
    ])
    out, _ = run_text(queries, targets)
    assert out == tsv(["chr1 10 20 A", "chr2 10 20 B"])


def test_out_of_order_query_contig():
    queries = tsv(["chr1 0 5", "chr2 0 5", "chr1 10 15"])
    with pytest.raises(OutOfOrderContig) as exc:
        run_text(queries, "")
    assert exc.value.line == 3


def test_empty_queries_succeed_with_no_output(targets_text):
    out, stats = run_text("", targets_text)
    assert out == ""
    assert stats == []


def test_empty_queries_strict(targets_text):
    with pytest.raises(EmptyInput):
        run_text("# only a comment\n", targets_text, strict_empty=True)


def test_bad_target_line_aborts():
    queries = tsv(["chr1 0 10"])
    targets = tsv(["chr1 src gene 1 20 . + . gene_name=A"]) + "chr1\tsrc\tgene\tx\t20\t.\t+\t.\tgene_name=B\n"
    with pytest.raises(ParseError) as exc:
        run_text(queries, targets)
    assert exc.value.line == 2


def test_malformed_attribute_aborts():
    with pytest.raises(MalformedAttribute):
        run_text(tsv(["chr1 0 10"]), "chr1\tsrc\tgene\t1\t20\t.\t+\t.\tgene_name=A;junk\n")


# ---------------------------------------------------------------------------
# summary / file entry point
# ---------------------------------------------------------------------------

def test_summary_frame():
    df = summary_frame([ContigStats("chr1", 4, 8, 3), ContigStats("chrM", 1, 0, 0)])
    assert list(df.columns) == ["contig", "queries", "targets", "annotated", "unannotated", "annotated_fraction"]
    assert list(df["contig"]) == ["chr1", "chrM", "TOTAL"]
    assert list(df["unannotated"]) == [1, 1, 2]
    assert list(df["annotated_fraction"]) == [0.75, 0.0, 0.6]


def test_summary_frame_empty():
    df = summary_frame([])
    assert list(df["contig"]) == ["TOTAL"]
    assert df.loc[0, "annotated_fraction"] == 0.0


def test_annotate_paths_with_gzip(tmp_path, queries_text, targets_text, expected_text):
    regions = tmp_path / "regions.bed.gz"
    with gzip.open(regions, "wt") as f:
        f.write(queries_text)
    ref = tmp_path / "ref.gff3.gz"
    with gzip.open(ref, "wt") as f:
        f.write("##gff-version 3\n" + targets_text)
    out = tmp_path / "out.bed"
    summary = tmp_path / "summary.tsv"

    stats = annotate_paths(str(regions), str(ref), str(out), summary_path=str(summary))

    assert out.read_text() == expected_text
    assert sum(s.queries for s in stats) == 9
    df = pd.read_csv(summary, sep="\t")
    assert df.iloc[-1]["contig"] == "TOTAL"
    assert df.iloc[-1]["annotated"] == 7


def test_annotate_paths_resolves_alias(tmp_path, targets_text):
    ref_dir = tmp_path / "hg38"
    ref_dir.mkdir()
    with gzip.open(ref_dir / "gencode.v43.basic.annotation.gtf.gz", "wt") as f:
        f.write(targets_text)
    regions = tmp_path / "r.bed"
    regions.write_text(tsv(["chr2 5 55"]))
    out = tmp_path / "o.bed"
    annotate_paths(str(regions), "hg38", str(out), data_dir=str(tmp_path))
    assert out.read_text() == tsv(["chr2 5 55 KEEPchr2"])


def test_feature_without_attributes_ranks_and_emits_placeholder():
    targets = "chr1\tsrc\tCDS\t1\t1000\t.\t+\t.\t.\n" + tsv(["chr1 src gene 1 20 . + . gene_name=G"])
    out, stats = run_text(tsv(["chr1 0 10"]), targets)
    # the CDS outranks the gene but has no gene_name
    assert out == "chr1\t0\t10\t.\n"
    assert stats[0].annotated == 1


def test_summary_and_output_cannot_share_stdout(tmp_path):
    regions = tmp_path / "r.bed"
    regions.write_text(tsv(["chr1 0 10"]))
    ref = tmp_path / "ref.gtf"
    ref.write_text("")
    with pytest.raises(BedannoError):
        annotate_paths(str(regions), str(ref), "-", summary_path="-")
