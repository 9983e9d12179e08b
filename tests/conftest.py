import pytest

from mmflow.core.catalog import ModificationCatalog
from mmflow.core.models import (
    CleavageMode,
    DigestionParameters,
    Enzyme,
    SearchParameters,
)


@pytest.fixture
def catalog():
    return ModificationCatalog.default()


@pytest.fixture
def trypsin():
    return Enzyme(
        name="Trypsin",
        aminoacid_before=["K", "R"],
        restriction_after=["P"],
        cv_term={"ontology": "PSI-MS", "accession": "MS:1001251", "name": "Trypsin"},
    )


@pytest.fixture
def search(trypsin):
    return SearchParameters(
        fragment_ion_accuracy=0.02,
        fragment_accuracy_type="absolute",
        precursor_accuracy=10.0,
        precursor_accuracy_type="ppm",
        modifications={
            "fixed": ["Carbamidomethylation of C"],
            "variable": ["Oxidation of M"],
        },
        digestion=DigestionParameters(
            cleavage_mode=CleavageMode.enzyme,
            enzymes=[trypsin],
            missed_cleavages={"Trypsin": 2},
        ),
    )


@pytest.fixture
def install_dir(tmp_path):
    d = tmp_path / "MetaMorpheus"
    d.mkdir()
    (d / "CMD.dll").write_text("")
    (d / "CMD.exe").write_text("")
    return d
