"""Save-time stamping of shadow fields."""

from typing import List

from shadowstamp.logging import get_logger
from shadowstamp.protocols.host import TrackedDocument
from shadowstamp.settings import ShadowFieldSettings
from shadowstamp.utils.datetime import get_current_timestamp

logger = get_logger(__name__)


class ShadowStamper:
    """Pre-save hook assigning the save time to the shadow field of each changed path.

    The shadow field of ``path`` is ``path + suffix``; it is stamped whenever the
    schema declares it, including a user-declared path of that name.

    Every shadow field stamped during one save receives the same timestamp.
    With ``overwrite`` disabled, a shadow field that was itself explicitly set
    in the same save keeps its explicit value.
    """

    def __init__(self, settings: ShadowFieldSettings):
        self.settings = settings

    def __call__(self, document: TrackedDocument) -> None:
        now = get_current_timestamp()
        definition = document.schema.definition
        suffix = self.settings.field_suffix
        modified = set(document.modified_paths())

        stamped: List[str] = []
        for path in self._candidate_paths(document):
            if suffix in path or definition.is_shadow_path(path):
                continue

            shadow = path + suffix
            if not definition.has_path(shadow):
                continue

            if self.settings.overwrite or shadow not in modified:
                document.set(shadow, now)
                stamped.append(shadow)

        if stamped:
            logger.debug(
                "Stamped %d shadow field(s)",
                len(stamped),
                extra={"shadow_paths": stamped, "stamped_at": now.isoformat()},
            )

    def _candidate_paths(self, document: TrackedDocument) -> List[str]:
        paths = list(document.modified_paths())
        if self.settings.stamp_defaults and document.is_new:
            paths.extend(p for p in document.defaulted_paths() if p not in paths)
        return paths
