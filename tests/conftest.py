import pytest

from mrpcr import polymerase as polymerase_tables
from mrpcr.polymerase import Polymerase, Reagent
from mrpcr.primer import Primer, PrimerCombination


PRIMER_SEQS = {
    "27F": "AGAGTTTGATCCTGGCTCAG",
    "1492R": "GGTTACCTTGTTACGACTT",
    "short_F": "GGGGCCCCAAAA",
    "short_R": "GGGGGCCCCCAAA",
}


@pytest.fixture
def primers():
    """A list of valid primers."""
    return [Primer(id, seq=seq) for id, seq in PRIMER_SEQS.items()]


@pytest.fixture
def combinations():
    """Two valid combinations and one referencing a deleted primer."""
    return [
        PrimerCombination("16S", "27F", "1492R", fragment_size=1465, num_reactions=8),
        PrimerCombination("short", "short_F", "short_R", fragment_size=500),
        PrimerCombination("dangling", "27F", "deleted_R", fragment_size=300),
    ]


@pytest.fixture
def degenerate_taq(monkeypatch):
    """Patch the Taq recipe so water goes negative at 25 uL (-9.5 uL)."""
    recipe = Polymerase.TAQ.recipe._replace(
        buffer=Reagent("Oversized buffer", "10x", "1x", 30.0)
    )
    monkeypatch.setitem(polymerase_tables.RECIPES, Polymerase.TAQ, recipe)
    return recipe


@pytest.fixture(scope="session")
def temp_inputs_path(tmp_path_factory):
    """Return a temp_path for generating input files"""
    return tmp_path_factory.mktemp("inputs")


@pytest.fixture(scope="session")
def primers_fasta(temp_inputs_path):
    """Generate a primer FASTA file"""
    fh = temp_inputs_path / "primers.fa"
    fh.write_text("".join(f">{id}\n{seq}\n" for id, seq in PRIMER_SEQS.items()))
    return fh


@pytest.fixture(scope="session")
def primers_fasta_empty(temp_inputs_path):
    """Generate an empty FASTA file"""
    fh = temp_inputs_path / "empty.fa"
    fh.write_text("")
    return fh


@pytest.fixture(scope="session")
def primers_fasta_missing_seq(temp_inputs_path):
    """Generate a FASTA file where one primer has no valid bases"""
    fh = temp_inputs_path / "missing_seq.fa"
    fh.write_text(">27F\nAGAGTTTGATCCTGGCTCAG\n>blank_R\nNNNN\n")
    return fh


@pytest.fixture(scope="session")
def combinations_tsv(temp_inputs_path):
    """Generate a combinations TSV file"""
    fh = temp_inputs_path / "combinations.tsv"
    fh.write_text(
        "name\tforward\treverse\tfragment_size\treactions\n"
        "16S\t27F\t1492R\t1465\t8\n"
        "short\tshort_F\tshort_R\t500\t4\n"
        "dangling\t27F\tdeleted_R\t300\t2\n"
    )
    return fh


@pytest.fixture(scope="session")
def combinations_tsv_blank_primer(temp_inputs_path):
    """Generate a combinations TSV referencing a primer without sequence"""
    fh = temp_inputs_path / "combinations_blank.tsv"
    fh.write_text("forward\treverse\tfragment_size\treactions\n27F\tblank_R\t500\t2\n")
    return fh


@pytest.fixture(scope="session")
def combinations_tsv_all_dangling(temp_inputs_path):
    """Generate a combinations TSV where no combination resolves"""
    fh = temp_inputs_path / "combinations_dangling.tsv"
    fh.write_text("forward\treverse\tfragment_size\treactions\nfoo\tbar\t500\t2\n")
    return fh


@pytest.fixture(scope="session")
def combinations_tsv_bad_columns(temp_inputs_path):
    """Generate a combinations TSV without the required columns"""
    fh = temp_inputs_path / "combinations_bad.tsv"
    fh.write_text("fwd\trev\tsize\n27F\t1492R\t500\n")
    return fh


@pytest.fixture(scope="session")
def combinations_tsv_duplicate_names(temp_inputs_path):
    """Generate a combinations TSV where two rows share a name"""
    fh = temp_inputs_path / "combinations_duplicate.tsv"
    fh.write_text(
        "name\tforward\treverse\tfragment_size\treactions\n"
        "pcr\tshort_F\tshort_R\t500\t2\n"
        "pcr\t27F\t1492R\t5000\t2\n"
    )
    return fh
