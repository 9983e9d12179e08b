import pytest

from mmflow.core.errors import UnsupportedConfiguration
from mmflow.core.models import CleavageMode, DigestionParameters, Enzyme
from mmflow.software.enzymes import (
    BASELINE_PROTEASE_ROW,
    HEADER,
    EnzymeDefinitionGenerator,
    cleavage_site_expression,
)


def test_cleavage_before_without_restriction():
    assert cleavage_site_expression(Enzyme(name="Trypsin/P", aminoacid_before=["K", "R"])) == "K|,R|"


def test_cleavage_before_with_restriction():
    assert cleavage_site_expression(Enzyme(name="Lys-C", aminoacid_before=["K"], restriction_after=["P"])) == "K|[P]"
    e = Enzyme(name="Trypsin", aminoacid_before=["K", "R"], restriction_after=["P"])
    assert cleavage_site_expression(e) == "K|[P],R|[P]"


def test_cleavage_after():
    assert cleavage_site_expression(Enzyme(name="Asp-N", aminoacid_after=["D"])) == "|D"
    e = Enzyme(name="odd", aminoacid_after=["D", "E"], restriction_before=["P"])
    assert cleavage_site_expression(e) == "[P]|D,[P]|E"


def _rows(tmp_path, digestion):
    path = EnzymeDefinitionGenerator(digestion).write(tmp_path / "proteases.tsv")
    return path.read_text().splitlines()


def test_whole_protein_table(tmp_path):
    rows = _rows(tmp_path, DigestionParameters(cleavage_mode=CleavageMode.whole_protein))
    assert rows[0] == HEADER
    assert rows[1] == BASELINE_PROTEASE_ROW
    assert len(rows) == 3
    assert rows[2].startswith("Whole Protein\t")


def test_unspecific_table(tmp_path):
    rows = _rows(tmp_path, DigestionParameters(cleavage_mode=CleavageMode.unspecific))
    assert rows[2] == "Unspecific\tX|\t\t\tfull\tMS:1001956\tunspecific cleavage"


def test_enzyme_row(tmp_path, trypsin):
    d = DigestionParameters(enzymes=[trypsin], specificity={"Trypsin": "semi"})
    rows = _rows(tmp_path, d)
    cols = rows[2].split("\t")
    assert len(cols) == 9
    assert cols == ["Trypsin", "K|[P],R|[P]", "", "", "semi", "MS:1001251", "Trypsin", "", ""]


def test_enzyme_row_without_cv_term(tmp_path):
    d = DigestionParameters(enzymes=[Enzyme(name="Asp-N", aminoacid_after=["D"])])
    cols = _rows(tmp_path, d)[2].split("\t")
    assert cols == ["Asp-N", "|D", "", "", "full", "", "", "", ""]


def test_multiple_enzymes_write_nothing(tmp_path, trypsin):
    d = DigestionParameters(enzymes=[trypsin, Enzyme(name="Asp-N", aminoacid_after=["D"])])
    target = tmp_path / "proteases.tsv"
    with pytest.raises(UnsupportedConfiguration):
        EnzymeDefinitionGenerator(d).write(target)
    assert not target.exists()
