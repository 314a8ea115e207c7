"""
Evaluation export

Evaluations are grouped by the subject's department and then by
evaluation number, and written to a workbook with one sheet per
department and one table section per non-empty evaluation number.
"""
import io
import re
from dataclasses import dataclass, field
from typing import Dict, List
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from evalhub.models.evaluation import Evaluation, CRITERIA_FIELDS
from evalhub.schemas.department import ResolvedDepartment, UnresolvedDepartment, department_ref

EVALUATION_NUMBERS = (1, 2, 3)
UNKNOWN_DEPARTMENT = "Unknown Department"
DATE_FORMAT = "%d.%m.%Y"

COLUMNS = [
    "Full Name",
    "Email",
    "Average",
    "Davamiyyet",
    "İşgüzar",
    "Stres",
    "ASC",
    "Qavrama",
    "İxtisas",
    "Etika",
    "Komanda",
    "Date",
]
COLUMN_WIDTHS = [20, 25, 10, 12, 10, 10, 10, 10, 10, 10, 10, 15]

TITLE_FONT = Font(bold=True, size=16, color="1F4E79")
SECTION_FONT = Font(bold=True, size=14, color="FFFFFF")
SECTION_FILL = PatternFill(start_color="305496", end_color="305496", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")


@dataclass
class DepartmentGroup:
    """Evaluations of one department, bucketed by evaluation number"""
    department_id: int
    name: str
    buckets: Dict[int, List[Evaluation]] = field(
        default_factory=lambda: {number: [] for number in EVALUATION_NUMBERS}
    )


@dataclass
class TableSection:
    evaluation_number: int
    rows: List[list]


@dataclass
class DepartmentSheet:
    name: str
    sections: List[TableSection]


def department_label(user) -> str:
    ref = department_ref(user)
    if isinstance(ref, ResolvedDepartment):
        return ref.name
    if isinstance(ref, UnresolvedDepartment):
        return UNKNOWN_DEPARTMENT
    raise ValueError("user has no department")


def evaluation_row(evaluation: Evaluation) -> list:
    """Full name, email, average, the eight criteria, evaluation date"""
    user = evaluation.user
    date = evaluation.evaluation_date
    return [
        user.full_name,
        user.email,
        evaluation.average_score,
        *[getattr(evaluation, name) for name in CRITERIA_FIELDS],
        date.strftime(DATE_FORMAT) if date else "",
    ]


def sheet_title(name: str, used: set) -> str:
    """Excel sheet names: at most 31 characters, no []:*?/\\, unique"""
    title = re.sub(r"[\[\]:*?/\\]", "_", name).strip() or UNKNOWN_DEPARTMENT
    title = title[:31]
    candidate = title
    suffix = 2
    while candidate.lower() in used:
        tail = f" ({suffix})"
        candidate = title[:31 - len(tail)] + tail
        suffix += 1
    used.add(candidate.lower())
    return candidate


class EvaluationExporter:
    """Builds the department evaluation workbook"""

    def group(self, evaluations: List[Evaluation]) -> List[DepartmentGroup]:
        """
        Group by department, then by evaluation number

        Evaluations whose subject has no department (or no longer exists)
        are skipped. Rows keep the order they were fetched in.
        """
        groups: Dict[int, DepartmentGroup] = {}
        for evaluation in evaluations:
            user = evaluation.user
            if user is None or user.department_id is None:
                continue
            if evaluation.evaluation_number not in EVALUATION_NUMBERS:
                continue
            group = groups.get(user.department_id)
            if group is None:
                group = DepartmentGroup(department_id=user.department_id, name=department_label(user))
                groups[user.department_id] = group
            group.buckets[evaluation.evaluation_number].append(evaluation)
        return list(groups.values())

    def build_sheets(self, groups: List[DepartmentGroup]) -> List[DepartmentSheet]:
        """Table sections per department; empty buckets produce no section"""
        sheets = []
        for group in groups:
            sections = [
                TableSection(
                    evaluation_number=number,
                    rows=[evaluation_row(e) for e in group.buckets[number]]
                )
                for number in EVALUATION_NUMBERS
                if group.buckets[number]
            ]
            sheets.append(DepartmentSheet(name=group.name, sections=sections))
        return sheets

    def render(self, sheets: List[DepartmentSheet]) -> bytes:
        """Serialize sheets to .xlsx bytes"""
        workbook = Workbook()
        workbook.remove(workbook.active)
        used_titles = set()

        if not sheets:
            worksheet = workbook.create_sheet("Evaluations")
            worksheet.cell(row=1, column=1, value="No evaluations found")

        for sheet in sheets:
            worksheet = workbook.create_sheet(sheet_title(sheet.name, used_titles))
            for index, width in enumerate(COLUMN_WIDTHS, start=1):
                worksheet.column_dimensions[get_column_letter(index)].width = width

            title = worksheet.cell(row=1, column=1, value=f"{sheet.name} - Evaluations")
            title.font = TITLE_FONT
            title.alignment = Alignment(horizontal="center")
            worksheet.merge_cells(start_row=1, start_column=1, end_row=1, end_column=len(COLUMNS))

            row = 3
            for section in sheet.sections:
                header = worksheet.cell(row=row, column=1, value=f"Evaluation #{section.evaluation_number}")
                header.font = SECTION_FONT
                header.fill = SECTION_FILL
                worksheet.merge_cells(start_row=row, start_column=1, end_row=row, end_column=len(COLUMNS))
                row += 1

                for column, label in enumerate(COLUMNS, start=1):
                    cell = worksheet.cell(row=row, column=column, value=label)
                    cell.font = HEADER_FONT
                    cell.fill = HEADER_FILL
                row += 1

                for values in section.rows:
                    for column, value in enumerate(values, start=1):
                        worksheet.cell(row=row, column=column, value=value)
                    row += 1
                row += 1

        output = io.BytesIO()
        workbook.save(output)
        return output.getvalue()

    def export(self, evaluations: List[Evaluation]) -> bytes:
        return self.render(self.build_sheets(self.group(evaluations)))


evaluation_exporter = EvaluationExporter()
