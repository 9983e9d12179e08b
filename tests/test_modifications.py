import pytest

from mmflow.core.catalog import ModificationCatalog
from mmflow.core.errors import UnsupportedModificationType
from mmflow.core.models import Modification, ModificationType
from mmflow.software.modifications import (
    POSITION_LITERALS,
    ModificationRecordGenerator,
    sanitize_modification_name,
)


def _record(mod: Modification) -> list:
    gen = ModificationRecordGenerator([], [], ModificationCatalog([mod]))
    return gen.format_record(mod).splitlines()


def test_sanitize_name():
    assert sanitize_modification_name("Oxidation of M") == "Oxidation off M"
    assert sanitize_modification_name("Acetylation of protein N-term") == "Acetylation off protein N-term"
    assert sanitize_modification_name("Pyrolidone from Q") == "Pyrolidone from Q"


def test_full_record_layout():
    mod = Modification(
        name="Phosphorylation of Y",
        pattern=["Y"],
        composition="H1 O3 P1",
        neutral_losses=["H3 O4 P1"],
        reporter_ions=["C8 H10 N1 O4 P1"],
        unimod={"ontology": "UNIMOD", "accession": "UNIMOD:21", "name": "Phospho"},
    )
    assert _record(mod) == [
        "ID   Phosphorylation off Y",
        "TG   Y",
        "PP   Anywhere.",
        "NL   H3 O4 P1",
        "MT   SearchGUI",
        "CF   H1 O3 P1",
        "DI   C8 H10 N1 O4 P1",
        "DR   Unimod; 21.",
        "//",
    ]


def test_empty_pattern_targets_x():
    mod = Modification(name="Anything", pattern=[], composition="O1")
    lines = _record(mod)
    assert "TG   X" in lines
    assert "PP   Anywhere." in lines


def test_optional_lines_omitted():
    mod = Modification(name="Plain", pattern=["S", "T"], composition="O1")
    lines = _record(mod)
    assert lines[1] == "TG   S or T"
    assert not any(line.startswith(("NL", "DI", "DR")) for line in lines)
    assert lines[-1] == "//"


@pytest.mark.parametrize(
    "mod_type,literal",
    [
        (ModificationType.modc_protein, "C-terminal."),
        (ModificationType.modcaa_protein, "C-terminal."),
        (ModificationType.modn_protein, "N-terminal."),
        (ModificationType.modnaa_protein, "N-terminal."),
        (ModificationType.modc_peptide, "Peptide C-terminal."),
        (ModificationType.modcaa_peptide, "Peptide C-terminal."),
        (ModificationType.modn_peptide, "Peptide N-terminal."),
        (ModificationType.modnaa_peptide, "Peptide N-terminal."),
    ],
)
def test_position_literals(mod_type, literal):
    mod = Modification(name="m", modification_type=mod_type, composition="O1")
    assert _record(mod)[2] == f"PP   {literal}"


def test_incomplete_position_table_rejected():
    table = dict(POSITION_LITERALS)
    del table[ModificationType.modcaa_peptide]
    with pytest.raises(UnsupportedModificationType):
        ModificationRecordGenerator([], [], ModificationCatalog(), position_literals=table)


def test_unmapped_type_raises_on_render():
    mod = Modification.model_construct(
        name="Odd", pattern=[], modification_type="crosslink", neutral_losses=[],
        composition="O1", reporter_ions=[], unimod=None,
    )
    gen = ModificationRecordGenerator(["Odd"], [], ModificationCatalog([mod]))
    with pytest.raises(UnsupportedModificationType):
        gen.render()


def test_file_order_and_title(tmp_path, catalog):
    gen = ModificationRecordGenerator(
        ["Carbamidomethylation of C"], ["Oxidation of M", "Acetylation of protein N-term"], catalog
    )
    path = gen.write(tmp_path / "Mods" / "CustomModifications.txt")
    text = path.read_text(encoding="utf-8")
    assert text.startswith("Custom Modifications\n")
    ids = [line[5:] for line in text.splitlines() if line.startswith("ID   ")]
    assert ids == [
        "Carbamidomethylation off C",
        "Oxidation off M",
        "Acetylation off protein N-term",
    ]
    assert text.count("//\n") == 3
    assert " of " not in text


def test_unknown_modification_is_key_error(catalog):
    gen = ModificationRecordGenerator(["Not a modification"], [], catalog)
    with pytest.raises(KeyError):
        gen.render()
