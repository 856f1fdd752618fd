"""Board and picker widgets."""

from octopai.ui.widgets.column import SectionColumn
from octopai.ui.widgets.confirm import ConfirmDialog
from octopai.ui.widgets.issue_form import IssueForm
from octopai.ui.widgets.legend import Legend

__all__ = ["ConfirmDialog", "IssueForm", "Legend", "SectionColumn"]
