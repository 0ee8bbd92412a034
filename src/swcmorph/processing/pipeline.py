import argparse
import json
import logging
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
from tqdm import tqdm

from ..core.reconstruction import reconstruct_sections
from ..io.swc_text import parse_points, read_swc_file
from ..structures.morphology import Morphology
from ..structures.node_graph import NodeGraph
from ..structures.swc import SWCFile

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class SwcParser:
    """
    Parses SWC text into a `Morphology`.

    The parser keeps the result of the last `parse` call; use one instance per
    thread, every call overwrites the previous result.
    """

    def __init__(self):
        self._morphology: Optional[Morphology] = None

    def parse(self, swc_text: str, morphology_id: Optional[Any] = None) -> Morphology:
        """
        Executes the reconstruction for one SWC document: points, node tree,
        sections, morphology.

        Args:
            swc_text (str): Content of an SWC file.
            morphology_id: Label given to the morphology.

        Returns:
            Morphology: The morphology, possibly empty.

        Raises:
            MalformedTraceError: If a point references a parent that is not defined before it.
        """
        self._morphology = None

        points = parse_points(swc_text)
        graph = NodeGraph(points)
        soma = graph.build_soma()
        sections = reconstruct_sections(graph)

        if not sections:
            logger.warning("This morphology has no section to export.")
        if soma is None:
            logger.warning("This morphology has no soma.")
        if not sections and soma is None:
            logger.warning("No valid morphology data.")

        self._morphology = Morphology(sections=sections, soma=soma, morphology_id=morphology_id)
        return self._morphology

    @property
    def morphology(self) -> Optional[Morphology]:
        return self._morphology

    @property
    def raw_morphology(self) -> Optional[Dict[str, Any]]:
        """The flat description of the last morphology, see `Morphology.to_raw`."""
        if self._morphology is None:
            return None
        return self._morphology.to_raw()


def parse_swc(swc_text: str, morphology_id: Optional[Any] = None) -> Morphology:
    return SwcParser().parse(swc_text, morphology_id=morphology_id)


def load_swc(path) -> Morphology:
    """Reads and parses an SWC file. The file stem is used as morphology id."""
    path = Path(path)
    return parse_swc(read_swc_file(path), morphology_id=path.stem)


def summarize_morphology(morphology: Morphology) -> Dict[str, Any]:
    """
    Gives the main figures of a morphology as plain Python values.

    Returns:
        Dict[str, Any]: id, number of sections, number of sections per type name,
        total length of the sections, soma radius and soma center (None without soma).
    """
    sections = morphology.sections
    soma = morphology.soma
    center = soma.get_center() if soma is not None else None
    return {
        "id": morphology.id,
        "sections": len(sections),
        "sections_per_type": dict(Counter(s.type_name for s in sections)),
        "total_length": float(np.sum([s.get_size() for s in sections])) if sections else 0.0,
        "soma_radius": soma.radius if soma is not None else None,
        "soma_center": center.tolist() if center is not None else None,
    }


def _format_summary(summary: Dict[str, Any]) -> str:
    per_type = ", ".join(f"{name}: {count}" for name, count in sorted(summary["sections_per_type"].items()))
    soma = "no soma" if summary["soma_radius"] is None else f"soma r={summary['soma_radius']:g}"
    return (
        f"{summary['id']}: {summary['sections']} sections ({per_type or 'none'}), "
        f"length {summary['total_length']:.2f}, {soma}"
    )


def summarize_files(paths: List[Path]) -> List[Dict[str, Any]]:
    """Loads every SWC file in turn and summarizes it."""
    summaries = []
    for path in tqdm(paths, desc="Reading morphologies", disable=len(paths) < 2):
        summaries.append(summarize_morphology(load_swc(path)))
    return summaries


def _command_summarize(args: argparse.Namespace) -> None:
    for summary in summarize_files([Path(p) for p in args.files]):
        print(_format_summary(summary))


def _command_export_raw(args: argparse.Namespace) -> None:
    morphology = load_swc(args.file)
    output = Path(args.output)
    with open(output, "w") as raw_file:
        json.dump(morphology.to_raw(), raw_file, indent=args.indent)
    logger.info(f"Raw morphology saved to {output}")


def _command_rewrite(args: argparse.Namespace) -> None:
    morphology = load_swc(args.file)
    SWCFile.from_morphology(morphology, args.output).write_file()


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swcmorph",
        description="Reconstruction of neuron morphologies (soma and sections) from SWC files.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--log_level",
        type=str,
        default="INFO",
        choices=LOG_LEVELS,
        help="Logging verbosity.",
    )

    # accepted after the command too, SUPPRESS keeps a level given before it
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log_level",
        type=str,
        default=argparse.SUPPRESS,
        choices=LOG_LEVELS,
        help="Logging verbosity.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    summarize = subparsers.add_parser(
        "summarize",
        parents=[common],
        help="Print the sections and soma of SWC files.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    summarize.add_argument("files", nargs="+", help="SWC files to read.")
    summarize.set_defaults(func=_command_summarize)

    export_raw = subparsers.add_parser(
        "export-raw",
        parents=[common],
        help="Save the flat morphology description as JSON.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    export_raw.add_argument("file", help="SWC file to read.")
    export_raw.add_argument("-o", "--output", required=True, help="JSON file to write.")
    export_raw.add_argument("--indent", type=int, default=2, help="JSON indentation.")
    export_raw.set_defaults(func=_command_export_raw)

    rewrite = subparsers.add_parser(
        "rewrite",
        parents=[common],
        help="Write the reconstructed morphology back as a normalized SWC file.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    rewrite.add_argument("file", help="SWC file to read.")
    rewrite.add_argument("-o", "--output", required=True, help="SWC file to write.")
    rewrite.set_defaults(func=_command_rewrite)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level), format="%(asctime)s - %(levelname)s - %(message)s"
    )
    args.func(args)
