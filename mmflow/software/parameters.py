"""
MetaMorpheus search task file (SearchTask.toml).

Most settings are fixed for every search; the modification lists, the mass
tolerances and the digestion block come from the search parameters.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from mmflow.core.catalog import ModificationCatalog
from mmflow.core.digestion import ProteaseSelection, resolve_protease
from mmflow.core.models import MassAccuracyType, SearchParameters

from .base import ArtifactGenerator
from .modifications import MODIFICATION_SOURCE, sanitize_modification_name, target_residues

MAX_THREADS_PER_FILE = 3

SEARCH_PARAMETERS = [
    ("DisposeOfFileWhenDone", "true"),
    ("DoParsimony", "true"),  # without parsimony no mzID is written
    ("ModPeptidesAreDifferent", "false"),
    ("NoOneHitWonders", "false"),
    ("MatchBetweenRuns", "false"),
    ("Normalize", "false"),
    ("QuantifyPpmTol", "5.0"),
    ("DoHistogramAnalysis", "false"),
    ("SearchTarget", "true"),
    ("DecoyType", '"None"'),
    ("MassDiffAcceptorType", '"OneMM"'),
    ("WritePrunedDatabase", "false"),
    ("KeepAllUniprotMods", "true"),
    ("DoLocalizationAnalysis", "true"),
    ("DoQuantification", "false"),
    ("SearchType", '"Classic"'),
    ("LocalFdrCategories", '["FullySpecific"]'),
    ("MaxFragmentSize", "30000.0"),
    ("HistogramBinTolInDaltons", "0.003"),
    ("MaximumMassThatFragmentIonScoreIsDoubled", "0.0"),
    ("WriteMzId", "true"),
    ("WritePepXml", "false"),
    ("WriteDecoys", "true"),
    ("WriteContaminants", "true"),
]

MODS_TO_WRITE_SELECTION = [
    ("'N-linked glycosylation'", "3"),
    ("'O-linked glycosylation'", "3"),
    ("'Other glycosylation'", "3"),
    ("'Common Biological'", "3"),
    ("'Less Common'", "3"),
    ("Metal", "3"),
    ("'2+ nucleotide substitution'", "3"),
    ("'1 nucleotide substitution'", "3"),
    ("UniProt", "2"),
]

DECONVOLUTION_PARAMETERS = [
    ("DoPrecursorDeconvolution", "true"),
    ("UseProvidedPrecursorInfo", "true"),
    ("DeconvolutionIntensityRatio", "3.0"),
    ("DeconvolutionMaxAssumedChargeState", "12"),
    ("DeconvolutionMassTolerance", '"±4.0000 PPM"'),
    ("TotalPartitions", "1"),
]

SCORING_PARAMETERS = [
    ("AddCompIons", "false"),
    ("ScoreCutoff", "5.0"),
    ("ReportAllAmbiguity", "true"),
    ("NumberOfPeaksToKeepPerWindow", "200"),
    ("MinimumAllowedIntensityRatioToBasePeak", "0.01"),
    ("NormalizePeaksAccrossAllWindows", "false"),
    ("TrimMs1Peaks", "false"),
    ("TrimMsMsPeaks", "true"),
    ("UseDeltaScore", "false"),
    ("QValueOutputFilter", "1.0"),
    ("CustomIons", "[]"),
    ("AssumeOrphanPeaksAreZ1Fragments", "true"),
    ("MaxHeterozygousVariants", "4"),
    ("MinVariantDepth", "1"),
    ("DissociationType", '"HCD"'),
    ("ChildScanDissociationType", '"Unknown"'),
]

MAX_MODIFICATION_ISOFORMS = 1024
MAX_MODS_FOR_PEPTIDE = 2
FRAGMENTATION_TERMINUS = "Both"  # Both, N, C
INITIATOR_METHIONINE_BEHAVIOR = "Variable"


def modification_list_value(names: Iterable[str], catalog: ModificationCatalog) -> str:
    """One "SearchGUI<TAB><name> on <residue>" entry per residue, joined by two tabs."""
    entries: List[str] = []
    for name in names:
        modification = catalog.get(name)
        sanitized = sanitize_modification_name(name)
        for residue in target_residues(modification):
            entries.append(f"{MODIFICATION_SOURCE}\t{sanitized} on {residue}")
    return "\t\t".join(entries)


def format_tolerance(value: float, accuracy_type: MassAccuracyType) -> str:
    unit = "PPM" if accuracy_type == MassAccuracyType.ppm else "Absolute"
    return f'"±{float(value)} {unit}"'


def _section(header: str, items) -> List[str]:
    return [f"[{header}]"] + [f"{key} = {value}" for key, value in items]


class ParameterDocumentGenerator(ArtifactGenerator):
    artifact_name = "parameters file"

    def __init__(
        self,
        search: SearchParameters,
        catalog: ModificationCatalog,
        selection: Optional[ProteaseSelection] = None,
    ):
        self.search = search
        self.catalog = catalog
        self._selection = selection

    @property
    def selection(self) -> ProteaseSelection:
        if self._selection is None:
            self._selection = resolve_protease(self.search.digestion)
        return self._selection

    def common_parameters(self) -> List[tuple]:
        search = self.search
        mods = search.modifications
        items = [
            ("MaxThreadsToUsePerFile", str(MAX_THREADS_PER_FILE)),
            ("ListOfModsFixed", f'"{modification_list_value(mods.fixed, self.catalog)}"'),
            ("ListOfModsVariable", f'"{modification_list_value(mods.variable, self.catalog)}"'),
        ]
        items.extend(DECONVOLUTION_PARAMETERS)
        items.append(("ProductMassTolerance", format_tolerance(search.fragment_ion_accuracy, search.fragment_accuracy_type)))
        items.append(("PrecursorMassTolerance", format_tolerance(search.precursor_accuracy, search.precursor_accuracy_type)))
        items.extend(SCORING_PARAMETERS)
        return items

    def digestion_parameters(self) -> List[tuple]:
        selection = self.selection
        settings = self.search.metamorpheus
        return [
            ("MaxMissedCleavages", str(selection.missed_cleavages)),
            ("InitiatorMethionineBehavior", f'"{INITIATOR_METHIONINE_BEHAVIOR}"'),
            ("MinPeptideLength", str(settings.resolved_min_peptide_length)),
            ("MaxPeptideLength", str(settings.resolved_max_peptide_length)),
            ("MaxModificationIsoforms", str(MAX_MODIFICATION_ISOFORMS)),
            ("MaxModsForPeptide", str(MAX_MODS_FOR_PEPTIDE)),
            ("Protease", f'"{selection.name}"'),
            ("SearchModeType", '"Full"'),
            ("FragmentationTerminus", f'"{FRAGMENTATION_TERMINUS}"'),
            ("SpecificProtease", f'"{selection.name}"'),
            ("GeneratehUnlabeledProteinsForSilac", "true"),
        ]

    def render(self) -> str:
        digestion = self.digestion_parameters()
        lines = ['TaskType = "Search"', ""]
        lines += _section("SearchParameters", SEARCH_PARAMETERS) + [""]
        lines += _section("SearchParameters.ModsToWriteSelection", MODS_TO_WRITE_SELECTION) + [""]
        lines += _section("CommonParameters", self.common_parameters()) + [""]
        lines += _section("CommonParameters.DigestionParams", digestion)
        return "\n".join(lines) + "\n"
