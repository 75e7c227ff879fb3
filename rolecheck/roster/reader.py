"""CSV roster reader.

Reads the exported roster into RosterRow values, one per data row, in file
order. Blank cells are preserved as empty values so output verdicts stay
aligned with input rows.
"""

import csv
from pathlib import Path
from typing import List, Optional, Union

from rolecheck.config.models import RosterConfig
from rolecheck.domain.models import RosterRow
from rolecheck.logging import get_logger
from rolecheck.normalization.text import normalize_profile_url

from .exceptions import InputError, RosterError

logger = get_logger(__name__, component="roster")


def read_roster(path: Union[str, Path], columns: Optional[RosterConfig] = None) -> List[RosterRow]:
    """Read roster rows from a CSV file.

    Args:
        path: CSV file path
        columns: Column names (defaults to "LinkedIn URL" / "Company" / "Position")

    Returns:
        List of RosterRow in file order

    Raises:
        RosterError: If the file cannot be read or a required column is missing
    """
    columns = columns or RosterConfig()
    path = Path(path)

    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            header = reader.fieldnames or []
            _check_columns(path, header, columns)

            include_position = bool(columns.position_column) and columns.position_column in header
            rows = []
            for row_number, record in enumerate(reader, start=1):
                rows.append(
                    RosterRow(
                        row_number=row_number,
                        profile_url=normalize_profile_url(record.get(columns.url_column) or ""),
                        expected_company=record.get(columns.company_column) or "",
                        position=record.get(columns.position_column) if include_position else None,
                    )
                )
    except RosterError:
        raise
    except FileNotFoundError:
        raise RosterError(
            f"Roster file not found: {path}",
            suggestions=["Check the CSV path and try again"],
        )
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise RosterError(
            f"Failed to read roster file {path}: {e}",
            suggestions=[
                "Ensure the file is a UTF-8 CSV export",
                "Check file permissions",
            ],
        )

    logger.info(
        f"Loaded {len(rows)} roster rows from {path.name}",
        extra={
            "event": "roster.loaded",
            "row_count": len(rows),
            "blank_url_count": sum(1 for row in rows if not row.has_url),
            "has_position": include_position,
        },
    )

    return rows


def _check_columns(path: Path, header: List[str], columns: RosterConfig) -> None:
    missing = [
        name for name in (columns.url_column, columns.company_column) if name not in header
    ]
    if missing:
        raise RosterError(
            f"Roster file {path} is missing required columns",
            errors=[f"Missing column: '{name}'" for name in missing],
            suggestions=[
                f"Found columns: {', '.join(header) if header else '(none)'}",
                "Set roster.url_column / roster.company_column in the config file",
            ],
        )


def check_row(row: RosterRow) -> None:
    """Ensure a row has the cells needed for a comparison.

    Raises:
        InputError: If the URL or expected company is blank
    """
    missing = []
    if not row.has_url:
        missing.append("profile_url")
    if not row.has_expected_company:
        missing.append("expected_company")
    if missing:
        raise InputError(row.row_number, missing)
