import pytest

from bedanno.gff.io import Target
from bedanno.interval import Interval


def tsv(lines):
    """Join whitespace-aligned rows into tab-separated lines."""
    return "".join("\t".join(x.split()) + "\n" for x in lines)


def make_target(start, end, feature_type="gene", contig="chr1", **attrs):
    """Target over half-open [start, end)."""
    return Target(contig, Interval(start, end), feature_type, dict(attrs))


@pytest.fixture
def queries_text():
    return tsv([
        "chr1  10  50",
        "chr1  100 150",
        "chr1  400 500",
        "chr1  600 700",
        "chr10 10  50",
        "chr10 55  60",
        "chr2  5   55",
        "chrX  100 200",
        "chrM  0   200",
    ])


@pytest.fixture
def targets_text():
    return tsv([
        "chr1  havana gene 1    5    . + . gene_name=SKIP1;",
        "chr1  havana gene 21   60   . + . gene_name=LOW1;",
        "chr1  havana CDS  31   40   . + . gene_name=KEEP1;",
        "chr1  havana CDS  91   170  . + . gene_name=KEEP2;",
        "chr1  havana gene 201  300  . + . gene_name=SKIP2;",
        "chr1  havana gene 601  700  . + . gene_name=LOW4;level=2;",
        "chr1  havana gene 551  650  . + . gene_name=KEEP4;level=1;",
        "chr1  havana gene 801  900  . + . gene_name=SKIP5;",
        "chr2  havana gene 1    500  . + . gene_name=KEEPchr2;",
        "chr10 havana gene 1    500  . + . gene_name=LOWchr10;transcript_support_level=2;",
        "chr10 havana gene 1    500  . + . gene_name=KEEPchr10;transcript_support_level=1;",
        "chrX  havana gene 1    500  . + . gene_name=KEEPchrX;",
    ])


@pytest.fixture
def expected_text():
    return tsv([
        "chr1  10  50  KEEP1",
        "chr1  100 150 KEEP2",
        "chr1  400 500 .",
        "chr1  600 700 KEEP4",
        "chr10 10  50  KEEPchr10",
        "chr10 55  60  KEEPchr10",
        "chr2  5   55  KEEPchr2",
        "chrX  100 200 KEEPchrX",
        "chrM  0   200 .",
    ])
