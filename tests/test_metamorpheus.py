import pytest

from mmflow.core.errors import IOFailure, UnsupportedConfiguration
from mmflow.core.models import DigestionParameters, Enzyme
from mmflow.core.workdir import WorkDirectoryResolver
from mmflow.software.metamorpheus import MetaMorpheusProcessBuilder


def _builder(install_dir, tmp_path, search, **kwargs):
    return MetaMorpheusProcessBuilder(
        install_dir=install_dir,
        search=search,
        spectrum_file=tmp_path / "run01.mgf",
        fasta_file=tmp_path / "db.fasta",
        os_name="Linux",
        **kwargs,
    )


def test_prepare_writes_all_files(tmp_path, install_dir, search):
    builder = _builder(install_dir, tmp_path, search)
    inv = builder.prepare()

    mods = install_dir / "Mods" / "CustomModifications.txt"
    enzymes = install_dir / "ProteolyticDigestion" / "proteases.tsv"
    params = install_dir / "temp" / "SearchTask.toml"
    for p in (mods, enzymes, params):
        assert p.is_file()

    assert inv.argv[:2] == ("dotnet", str(install_dir / "CMD.dll"))
    assert inv.argv[inv.argv.index("-t") + 1] == str(params)
    assert inv.argv[inv.argv.index("-o") + 1] == str(install_dir / "temp")
    assert builder.currently_processed_file_name == "run01.mgf"
    assert builder.search_engine_type == "MetaMorpheus"


def test_sanitized_name_everywhere(tmp_path, install_dir, search):
    _builder(install_dir, tmp_path, search).prepare()
    mods = (install_dir / "Mods" / "CustomModifications.txt").read_text(encoding="utf-8")
    params = (install_dir / "temp" / "SearchTask.toml").read_text(encoding="utf-8")
    assert "ID   Oxidation off M" in mods
    assert "Oxidation off M on M" in params
    assert "Oxidation of M" not in mods + params


def test_shared_resolver_reused(tmp_path, install_dir, search):
    resolver = WorkDirectoryResolver()
    resolver.resolve(tmp_path / "elsewhere")
    inv = _builder(install_dir, tmp_path, search, work_dirs=resolver).prepare()
    assert inv.argv[-1] == str(tmp_path / "elsewhere" / "temp")
    assert (tmp_path / "elsewhere" / "temp" / "SearchTask.toml").is_file()


def test_multiple_enzymes_abort_before_writing(tmp_path, install_dir, search, trypsin):
    digestion = DigestionParameters(enzymes=[trypsin, Enzyme(name="Asp-N", aminoacid_after=["D"])])
    search = search.model_copy(update={"digestion": digestion})
    with pytest.raises(UnsupportedConfiguration):
        _builder(install_dir, tmp_path, search).prepare()
    assert not (install_dir / "Mods").exists()
    assert not (install_dir / "ProteolyticDigestion").exists()
    assert not (install_dir / "temp" / "SearchTask.toml").exists()


def test_write_failure_is_io_failure(tmp_path, install_dir, search):
    # a file where the Mods folder should be
    (install_dir / "Mods").write_text("")
    with pytest.raises(IOFailure) as exc:
        _builder(install_dir, tmp_path, search).prepare()
    assert "modifications file" in str(exc.value)


def test_executable_file_name():
    assert MetaMorpheusProcessBuilder.executable_file_name("Windows 10") == "CMD.exe"
    assert MetaMorpheusProcessBuilder.executable_file_name("Linux") == "CMD.dll"
