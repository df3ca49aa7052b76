"""Mark unsent message parts in a reconstructed body."""

from typing import List, Sequence

from attributed_body.body.models import BubbleComponent, Retracted
from attributed_body.edited import EditedMessage


def apply_retractions(
    components: Sequence[BubbleComponent], edited: EditedMessage
) -> List[BubbleComponent]:
    """Insert a :class:`Retracted` component for every unsent part.

    Parts are handled in ascending order. A part index past the end of
    the body appends instead.
    """
    result = list(components)
    for index in edited.unsent_indexes():
        if index < len(result):
            result.insert(index, Retracted())
        else:
            result.append(Retracted())
    return result
