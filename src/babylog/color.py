# SPDX-License-Identifier: MIT

from babylog.model.duration import DurationClassification

# Cells saved within the highlight window
HIGHLIGHT_STYLE = "bold on dark_green"

# Cells with a commit in flight
SAVING_STYLE = "italic bright_black"

HEADER_COLOR = "dark_orange"
SUB_HEADER_COLOR = "sandy_brown"

SUCCESS_COLOR = "green"
ERROR_COLOR = "red"

CLASSIFICATION_COLORS: dict[DurationClassification, str] = {
    DurationClassification.BELOW_RECOMMENDED: "yellow",
    DurationClassification.WITHIN_RECOMMENDED: "green",
    DurationClassification.ABOVE_RECOMMENDED: "red",
}
