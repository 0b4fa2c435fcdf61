# catalog_sdk/validation.py
import math
from typing import List

from .models import ProductDraft, ValidationError

MIN_NAME_LENGTH = 10
MIN_DESCRIPTION_LENGTH = 10


def validate_product(draft: ProductDraft) -> List[ValidationError]:
    """
    Field-level checks shared by the online and offline paths.
    Returns an empty list when the draft is acceptable.
    """
    errors: List[ValidationError] = []

    if not draft.name or len(draft.name.strip()) < MIN_NAME_LENGTH:
        errors.append(ValidationError(
            field="name",
            message=f"Name must be at least {MIN_NAME_LENGTH} characters long",
        ))

    if not math.isfinite(draft.price) or draft.price <= 0:
        errors.append(ValidationError(field="price", message="Price must be greater than 0"))

    if not draft.description or len(draft.description.strip()) < MIN_DESCRIPTION_LENGTH:
        errors.append(ValidationError(
            field="description",
            message=f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters long",
        ))

    if not draft.category or not draft.category.strip():
        errors.append(ValidationError(field="category", message="Category is required"))

    return errors
