import logging
import typing
from typing import Dict, List, Optional

from .v30 import Operation, SecurityRequirement, SecurityScheme

if typing.TYPE_CHECKING:
    from .request import IncomingRequest

log = logging.getLogger("mockapi3.validator")


def effective_requirements(
    operation: Operation, default: Optional[List[SecurityRequirement]]
) -> Optional[List[SecurityRequirement]]:
    """
    the security of the operation replaces the document default, even if empty

    :return: None or an empty list if there is nothing to check
    """
    return operation.security if operation.security is not None else default


def describe(requirements: List[SecurityRequirement]) -> List[str]:
    """
    human readable alternatives: ['{a and b}', '{c}']
    """
    return sorted(map(lambda x: f"{{{' and '.join(sorted(x.root.keys()))}}}", requirements))


def is_satisfied(
    requirements: Optional[List[SecurityRequirement]],
    schemes: Dict[str, SecurityScheme],
    request: "IncomingRequest",
) -> bool:
    """
    any alternative has to be satisfied, an alternative requires all its schemes

    :param requirements: the alternatives, None or [] skip the check
    :param schemes: the securitySchemes of the document
    :param request: the request carrying the credentials
    """
    if not requirements:
        return True

    for requirement in requirements:
        for name in requirement.root.keys():
            if (scheme := schemes.get(name)) is None:
                log.warning(f"security scheme {name} is not declared")
                break
            if not scheme.root.validate_authentication_value(request):
                break
        else:
            return True
    return False
