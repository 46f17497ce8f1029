"""Per-probe issue catalogs mapping raw findings onto issue kinds.

Every probe reports its own loosely-typed mapping. A catalog lists the issue
kinds that probe can surface together with an extractor for each one. The
normalizer runs extractors one at a time, so a malformed field only costs the
issue kind that reads it.

Raw shapes, as the probes emit them (``a.b`` means nested keys, "elements"
means a list of selector strings or mappings with a ``selector``, ``element``,
``html``, ``text``, ``src`` or ``href`` entry):

``aria``
    ``landmarks.hasMainLandmark|hasNavigationLandmark|hasBannerLandmark``
    (bool); ``ariaLabels.emptyAriaLabels|invalidLabelledby|invalidDescribedby``
    (int); ``ariaRoles.invalidRoles`` and ``ariaStates.invalidStates``
    (elements); ``hiddenContent.hiddenInteractive`` (int), with optional
    ``hiddenContent.elements``.
``forms``
    ``totalFormControls`` (int); ``formControls.total|withLabels|withoutLabels|
    requiredWithoutIndicator|withPlaceholder`` (int) and
    ``formControls.unlabeled`` (elements); ``fieldsets.withoutLegend`` and
    ``buttons.withoutAccessibleName`` (int); ``validation.hasValidation``
    (bool). No form controls means the category does not apply.
``keyboard``
    ``interactiveElements.total|withPositiveTabindex`` (int) and
    ``interactiveElements.potentiallyInaccessible`` (elements);
    ``skipLinks.total|brokenLinks`` (int);
    ``tabNavigationTest.elementsWithoutFocusIndicator|hiddenFocusableElements``
    (int) and ``tabNavigationTest.hasLogicalOrder`` (bool). No interactive
    elements means there is nothing to fail and the category scores 100.
``color-contrast``
    ``summary.aaViolations|aaaViolations`` (int); ``violations`` (elements
    carrying a ``level`` of ``AA`` or ``AAA``).
``images``
    ``summary.totalImages|missingAltCount|meaninglessAltCount|
    complexImagesWithoutDesc|svgIssues|decorativeWithAlt|imageMapIssues|
    suspectedTextImages`` (int); ``missingAlt`` (elements). No images means
    the category does not apply.
``tables``
    ``totalTables`` and ``tablesForLayout`` (int);
    ``tableAnalysis.total|withCaption|withHeaders|withScope|withThead|
    complexTables`` (int); ``cellAnalysis.emptyHeaderCells`` (int). No tables
    means the category does not apply.
``structure``
    ``hasMain|hasNav|hasHeader|hasFooter|hasH1`` (bool); ``h1Count`` (int);
    ``headingHierarchy.violations`` (elements);
    ``documentStructure.hasTitle|hasLang`` (bool).
``navigation``
    ``navigationElements.primaryNav`` (mapping with ``tagName``, ``hasRole``,
    ``hasAriaLabel``, ``hasAriaLabelledby``, ``itemCount``, or null when the
    page has none); ``breadcrumbAnalysis.hasBreadcrumbs`` (bool);
    ``skipNavigationAnalysis.hasSkipLinks`` (bool) and
    ``skipNavigationAnalysis.issues`` (mappings with a ``type``);
    ``consistencyAnalysis.inconsistencies`` (elements); plus free-form
    ``issues``.
``content-structure``
    ``content.paragraphs`` (mappings with ``sentenceCount``);
    ``content.contentChunks`` (mappings with ``isLargeChunk``);
    ``whiteSpace.lineHeights|sectionSpacing`` (mappings with ``isAdequate``);
    ``summary.averageLineLength`` (number).
``text-readability``
    ``summary.zoomIssues|decorativeFontIssues|smallFontIssues|
    justifiedTextIssues|lineHeightIssues|spacingIssues|responsiveIssues``
    (int).
``mobile``
    ``touchTargets.tooSmall`` (elements); plus free-form ``issues`` such as
    ``missing_viewport`` or ``zoom_disabled``.
``seo``
    ``title.present`` (bool) and ``title.length`` (int);
    ``metaDescription.present`` (bool) and ``metaDescription.length`` (int);
    ``canonical.present`` and ``openGraph.present`` (bool).
``technical``
    ``https`` (bool); ``robotsTxt.exists``, ``sitemap.exists`` and
    ``structuredData.present`` (bool); ``brokenResources`` (elements).

Free-form ``issues`` entries are mappings with ``id`` or ``type``, an
optional ``severity`` or ``impact``, ``title`` or ``message``,
``wcagCriterion``, ``locations`` or ``element``, ``count``,
``estimatedFixTime``, ``businessImpact`` and ``userBenefit``.

Any category may also report ``error`` or ``summary.testFailed`` to signal
that the probe failed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

from ..domain.models import BusinessImpact, Category, Severity, Signal


class MalformedFieldError(ValueError):
    """Raised by an extractor when a raw field has an unexpected type."""


@dataclass(frozen=True)
class Extraction:
    """What an extractor found: how often, and where."""

    occurrences: int
    locations: tuple[str, ...] = ()


Extractor = Callable[[Mapping[str, Any]], "Extraction | None"]
Applicability = Callable[[Mapping[str, Any]], Signal]
ItemPredicate = Callable[[Any], bool]


@dataclass(frozen=True)
class IssueKind:
    """One catalog entry: issue metadata plus the extractor that finds it."""

    id: str
    title: str
    severity: Severity
    extract: Extractor
    wcag_criterion: str | None = None
    fix_minutes: int | None = None
    business_impact: BusinessImpact | None = None
    user_benefit: str | None = None


@dataclass(frozen=True)
class ProbeCatalog:
    category: Category
    kinds: tuple[IssueKind, ...]
    applicability: Applicability | None = None
    free_form_issues: bool = False

    def assess(self, raw: Mapping[str, Any]) -> Signal:
        if self.applicability is None:
            return Signal.OBSERVED
        try:
            return self.applicability(raw)
        except MalformedFieldError:
            return Signal.OBSERVED


_LOCATION_KEYS = ("selector", "element", "html", "text", "src", "href")


def lookup(raw: Mapping[str, Any], path: str) -> Any:
    """Return the value at a dotted ``path`` or ``None`` when absent."""

    current: Any = raw
    for part in path.split("."):
        if current is None:
            return None
        if not isinstance(current, Mapping):
            raise MalformedFieldError(path)
        current = current.get(part)
    return current


def _as_count(value: Any, path: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedFieldError(path)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value < 0:
        raise MalformedFieldError(path)
    return value


def _as_number(value: Any, path: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedFieldError(path)
    return float(value)


def _as_flag(value: Any, path: str) -> bool | None:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise MalformedFieldError(path)
    return value


def _as_items(value: Any, path: str) -> Sequence[Any] | None:
    if value is None:
        return None
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise MalformedFieldError(path)
    return value


def describe(item: Any) -> str | None:
    """Return a short location descriptor for an element entry."""

    if isinstance(item, str):
        return item.strip() or None
    if isinstance(item, Mapping):
        for key in _LOCATION_KEYS:
            value = item.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


def _describe_all(items: Sequence[Any]) -> tuple[str, ...]:
    return tuple(
        descriptor for descriptor in (describe(item) for item in items) if descriptor
    )


def _item_is(key: str, expected: Any) -> ItemPredicate:
    def _predicate(item: Any) -> bool:
        return isinstance(item, Mapping) and item.get(key) is expected

    return _predicate


def _item_above(key: str, limit: float) -> ItemPredicate:
    def _predicate(item: Any) -> bool:
        if not isinstance(item, Mapping):
            return False
        value = item.get(key)
        return (
            isinstance(value, (int, float))
            and not isinstance(value, bool)
            and value > limit
        )

    return _predicate


def _optional_locations(
    raw: Mapping[str, Any], path: str | None, where: ItemPredicate | None = None
) -> tuple[str, ...]:
    if path is None:
        return ()
    try:
        items = _as_items(lookup(raw, path), path)
    except MalformedFieldError:
        return ()
    if not items:
        return ()
    if where is not None:
        items = [item for item in items if where(item)]
    return _describe_all(items)


def counted(
    path: str, *, locations: str | None = None, where: ItemPredicate | None = None
) -> Extractor:
    """Issue when the integer at ``path`` is positive."""

    def _extract(raw: Mapping[str, Any]) -> Extraction | None:
        count = _as_count(lookup(raw, path), path)
        if not count:
            return None
        return Extraction(count, _optional_locations(raw, locations, where))

    return _extract


def listed(path: str, *, where: ItemPredicate | None = None) -> Extractor:
    """Issue per (matching) entry of the element list at ``path``."""

    def _extract(raw: Mapping[str, Any]) -> Extraction | None:
        items = _as_items(lookup(raw, path), path)
        if not items:
            return None
        if where is not None:
            items = [item for item in items if where(item)]
            if not items:
                return None
        return Extraction(len(items), _describe_all(items))

    return _extract


def flag_is(path: str, expected: bool, *, location: str | None = None) -> Extractor:
    """Single issue when the flag at ``path`` equals ``expected``.

    An absent flag never counts as a violation.
    """

    def _extract(raw: Mapping[str, Any]) -> Extraction | None:
        flag = _as_flag(lookup(raw, path), path)
        if flag is None or flag is not expected:
            return None
        return Extraction(1, (location,) if location else ())

    return _extract


def equals_zero(path: str) -> Extractor:
    def _extract(raw: Mapping[str, Any]) -> Extraction | None:
        count = _as_count(lookup(raw, path), path)
        if count is None or count != 0:
            return None
        return Extraction(1)

    return _extract


def exceeds(path: str, limit: float) -> Extractor:
    """Single issue when the number at ``path`` is above ``limit``."""

    def _extract(raw: Mapping[str, Any]) -> Extraction | None:
        value = _as_number(lookup(raw, path), path)
        if value is None or value <= limit:
            return None
        return Extraction(1)

    return _extract


def outside(path: str, low: int, high: int) -> Extractor:
    """Single issue when the integer at ``path`` falls outside ``[low, high]``."""

    def _extract(raw: Mapping[str, Any]) -> Extraction | None:
        value = _as_count(lookup(raw, path), path)
        if value is None or low <= value <= high:
            return None
        return Extraction(1)

    return _extract


def shortfall(total_path: str, present_path: str) -> Extractor:
    """Issue per item counted in ``total_path`` but missing from ``present_path``."""

    def _extract(raw: Mapping[str, Any]) -> Extraction | None:
        total = _as_count(lookup(raw, total_path), total_path)
        present = _as_count(lookup(raw, present_path), present_path)
        if total is None or present is None or present >= total:
            return None
        return Extraction(total - present)

    return _extract


def _placeholder_reliance(raw: Mapping[str, Any]) -> Extraction | None:
    with_placeholder = _as_count(
        lookup(raw, "formControls.withPlaceholder"), "formControls.withPlaceholder"
    )
    with_labels = _as_count(
        lookup(raw, "formControls.withLabels"), "formControls.withLabels"
    )
    if with_placeholder is None or with_labels is None:
        return None
    if with_placeholder <= with_labels * 0.5:
        return None
    return Extraction(1)


def _unscoped_complex_tables(raw: Mapping[str, Any]) -> Extraction | None:
    complex_tables = _as_count(
        lookup(raw, "tableAnalysis.complexTables"), "tableAnalysis.complexTables"
    )
    with_scope = _as_count(
        lookup(raw, "tableAnalysis.withScope"), "tableAnalysis.withScope"
    )
    if not complex_tables or with_scope != 0:
        return None
    return Extraction(complex_tables)


def _missing_thead(raw: Mapping[str, Any]) -> Extraction | None:
    with_thead = _as_count(
        lookup(raw, "tableAnalysis.withThead"), "tableAnalysis.withThead"
    )
    with_headers = _as_count(
        lookup(raw, "tableAnalysis.withHeaders"), "tableAnalysis.withHeaders"
    )
    if with_thead is None or with_headers is None or with_thead >= with_headers:
        return None
    return Extraction(1)


def _primary_nav(raw: Mapping[str, Any]) -> Mapping[str, Any] | None:
    nav = lookup(raw, "navigationElements.primaryNav")
    if nav is None:
        return None
    if not isinstance(nav, Mapping):
        raise MalformedFieldError("navigationElements.primaryNav")
    return nav


def _missing_primary_nav(raw: Mapping[str, Any]) -> Extraction | None:
    elements = lookup(raw, "navigationElements")
    if elements is None:
        return None
    if not isinstance(elements, Mapping):
        raise MalformedFieldError("navigationElements")
    if "primaryNav" not in elements or elements["primaryNav"]:
        return None
    return Extraction(1)


def _nav_without_role(raw: Mapping[str, Any]) -> Extraction | None:
    nav = _primary_nav(raw)
    if nav is None:
        return None
    has_role = _as_flag(nav.get("hasRole"), "primaryNav.hasRole")
    tag = nav.get("tagName")
    if has_role is not False or (isinstance(tag, str) and tag.lower() == "nav"):
        return None
    return Extraction(1)


def _nav_without_label(raw: Mapping[str, Any]) -> Extraction | None:
    nav = _primary_nav(raw)
    if nav is None:
        return None
    has_label = _as_flag(nav.get("hasAriaLabel"), "primaryNav.hasAriaLabel")
    has_labelledby = _as_flag(
        nav.get("hasAriaLabelledby"), "primaryNav.hasAriaLabelledby"
    )
    if has_label is not False or has_labelledby:
        return None
    return Extraction(1)


def _empty_primary_nav(raw: Mapping[str, Any]) -> Extraction | None:
    nav = _primary_nav(raw)
    if nav is None:
        return None
    if _as_count(nav.get("itemCount"), "primaryNav.itemCount") != 0:
        return None
    return Extraction(1)


def _not_applicable_when_zero(*paths: str) -> Applicability:
    """Category does not apply when the first present count is zero."""

    def _assess(raw: Mapping[str, Any]) -> Signal:
        for path in paths:
            count = _as_count(lookup(raw, path), path)
            if count is not None:
                return Signal.NOT_APPLICABLE if count == 0 else Signal.OBSERVED
        return Signal.OBSERVED

    return _assess


def _vacuous_without_interactive_elements(raw: Mapping[str, Any]) -> Signal:
    total = _as_count(
        lookup(raw, "interactiveElements.total"), "interactiveElements.total"
    )
    return Signal.VACUOUS if total == 0 else Signal.OBSERVED


_HIGH = BusinessImpact.HIGH
_MEDIUM = BusinessImpact.MEDIUM
_LOW = BusinessImpact.LOW

_SCREEN_READER_BENEFIT = (
    "Screen reader users can find and operate this content without guessing"
)
_KEYBOARD_BENEFIT = (
    "Keyboard and switch users can reach every control in a predictable order"
)
_VISION_BENEFIT = (
    "Low-vision readers and anyone in bright light can read the text comfortably"
)
_SEARCH_BENEFIT = (
    "Search engines and link previews describe the page accurately to new visitors"
)


_CATALOG_LIST: tuple[ProbeCatalog, ...] = (
    ProbeCatalog(
        Category.ARIA,
        (
            IssueKind(
                "missing-main-landmark",
                "Page has no main landmark",
                Severity.SERIOUS,
                flag_is("landmarks.hasMainLandmark", False, location="<body>"),
                wcag_criterion="1.3.1",
                fix_minutes=15,
                business_impact=_MEDIUM,
                user_benefit=_SCREEN_READER_BENEFIT,
            ),
            IssueKind(
                "missing-navigation-landmark",
                "Page has no navigation landmark",
                Severity.MODERATE,
                flag_is("landmarks.hasNavigationLandmark", False),
                wcag_criterion="1.3.1",
                fix_minutes=15,
            ),
            IssueKind(
                "missing-banner-landmark",
                "Page has no banner landmark",
                Severity.MINOR,
                flag_is("landmarks.hasBannerLandmark", False),
                wcag_criterion="1.3.1",
                fix_minutes=10,
            ),
            IssueKind(
                "empty-aria-label",
                "Elements carry empty aria-label attributes",
                Severity.SERIOUS,
                counted("ariaLabels.emptyAriaLabels"),
                wcag_criterion="4.1.2",
                fix_minutes=15,
            ),
            IssueKind(
                "invalid-aria-labelledby",
                "aria-labelledby points at missing elements",
                Severity.SERIOUS,
                counted("ariaLabels.invalidLabelledby"),
                wcag_criterion="1.3.1",
                fix_minutes=20,
            ),
            IssueKind(
                "invalid-aria-describedby",
                "aria-describedby points at missing elements",
                Severity.MODERATE,
                counted("ariaLabels.invalidDescribedby"),
                wcag_criterion="1.3.1",
                fix_minutes=20,
            ),
            IssueKind(
                "invalid-aria-role",
                "Elements use invalid ARIA roles",
                Severity.SERIOUS,
                listed("ariaRoles.invalidRoles"),
                wcag_criterion="4.1.2",
                fix_minutes=30,
                business_impact=_MEDIUM,
            ),
            IssueKind(
                "invalid-aria-state",
                "Elements use invalid ARIA state values",
                Severity.MODERATE,
                listed("ariaStates.invalidStates"),
                wcag_criterion="4.1.2",
                fix_minutes=30,
            ),
            IssueKind(
                "hidden-interactive-element",
                "Interactive elements are hidden from assistive technology",
                Severity.CRITICAL,
                counted(
                    "hiddenContent.hiddenInteractive",
                    locations="hiddenContent.elements",
                ),
                wcag_criterion="4.1.2",
                fix_minutes=20,
                business_impact=_HIGH,
                user_benefit=_SCREEN_READER_BENEFIT,
            ),
        ),
    ),
    ProbeCatalog(
        Category.FORMS,
        (
            IssueKind(
                "unlabeled-form-control",
                "Form controls have no accessible label",
                Severity.CRITICAL,
                counted(
                    "formControls.withoutLabels",
                    locations="formControls.unlabeled",
                ),
                wcag_criterion="3.3.2",
                fix_minutes=15,
                business_impact=_HIGH,
                user_benefit=(
                    "Everyone filling in the form knows what each field expects, "
                    "so fewer submissions are abandoned"
                ),
            ),
            IssueKind(
                "required-field-without-indicator",
                "Required fields are not marked as required",
                Severity.SERIOUS,
                counted("formControls.requiredWithoutIndicator"),
                wcag_criterion="3.3.2",
                fix_minutes=15,
                business_impact=_MEDIUM,
            ),
            IssueKind(
                "fieldset-without-legend",
                "Fieldsets have no legend",
                Severity.MODERATE,
                counted("fieldsets.withoutLegend"),
                wcag_criterion="1.3.1",
                fix_minutes=15,
            ),
            IssueKind(
                "button-without-accessible-name",
                "Buttons have no accessible name",
                Severity.CRITICAL,
                counted("buttons.withoutAccessibleName"),
                wcag_criterion="4.1.2",
                fix_minutes=10,
                business_impact=_HIGH,
            ),
            IssueKind(
                "placeholder-used-as-label",
                "Placeholders are used in place of labels",
                Severity.MINOR,
                _placeholder_reliance,
                wcag_criterion="3.3.2",
                fix_minutes=30,
            ),
            IssueKind(
                "missing-form-validation",
                "Forms give no validation feedback",
                Severity.MODERATE,
                flag_is("validation.hasValidation", False),
                wcag_criterion="3.3.1",
                fix_minutes=120,
                business_impact=_MEDIUM,
            ),
        ),
        applicability=_not_applicable_when_zero(
            "totalFormControls", "formControls.total"
        ),
    ),
    ProbeCatalog(
        Category.KEYBOARD,
        (
            IssueKind(
                "keyboard-inaccessible-element",
                "Interactive elements cannot be reached by keyboard",
                Severity.CRITICAL,
                listed("interactiveElements.potentiallyInaccessible"),
                wcag_criterion="2.1.1",
                fix_minutes=45,
                business_impact=_HIGH,
                user_benefit=_KEYBOARD_BENEFIT,
            ),
            IssueKind(
                "positive-tabindex",
                "Elements use a positive tabindex",
                Severity.MODERATE,
                counted("interactiveElements.withPositiveTabindex"),
                wcag_criterion="2.4.3",
                fix_minutes=15,
            ),
            IssueKind(
                "missing-skip-link",
                "Page has no skip link",
                Severity.SERIOUS,
                equals_zero("skipLinks.total"),
                wcag_criterion="2.4.1",
                fix_minutes=30,
                user_benefit=_KEYBOARD_BENEFIT,
            ),
            IssueKind(
                "broken-skip-link",
                "Skip links point at missing targets",
                Severity.SERIOUS,
                counted("skipLinks.brokenLinks"),
                wcag_criterion="2.4.1",
                fix_minutes=15,
            ),
            IssueKind(
                "missing-focus-indicator",
                "Focused elements show no visible indicator",
                Severity.SERIOUS,
                counted("tabNavigationTest.elementsWithoutFocusIndicator"),
                wcag_criterion="2.4.7",
                fix_minutes=60,
                business_impact=_MEDIUM,
                user_benefit=_KEYBOARD_BENEFIT,
            ),
            IssueKind(
                "hidden-focusable-element",
                "Hidden elements still receive keyboard focus",
                Severity.MODERATE,
                counted("tabNavigationTest.hiddenFocusableElements"),
                wcag_criterion="2.4.3",
                fix_minutes=30,
            ),
            IssueKind(
                "illogical-tab-order",
                "Tab order does not follow the visual order",
                Severity.SERIOUS,
                flag_is("tabNavigationTest.hasLogicalOrder", False),
                wcag_criterion="2.4.3",
                fix_minutes=240,
            ),
        ),
        applicability=_vacuous_without_interactive_elements,
    ),
    ProbeCatalog(
        Category.COLOR_CONTRAST,
        (
            IssueKind(
                "contrast-below-aa",
                "Text fails WCAG AA contrast",
                Severity.SERIOUS,
                counted(
                    "summary.aaViolations",
                    locations="violations",
                    where=_item_is("level", "AA"),
                ),
                wcag_criterion="1.4.3",
                fix_minutes=30,
                business_impact=_MEDIUM,
                user_benefit=_VISION_BENEFIT,
            ),
            IssueKind(
                "contrast-below-aaa",
                "Text fails WCAG AAA contrast",
                Severity.MINOR,
                counted(
                    "summary.aaaViolations",
                    locations="violations",
                    where=_item_is("level", "AAA"),
                ),
                wcag_criterion="1.4.6",
                fix_minutes=30,
            ),
        ),
    ),
    ProbeCatalog(
        Category.IMAGES,
        (
            IssueKind(
                "missing-alt-text",
                "Images have no alternative text",
                Severity.CRITICAL,
                counted("summary.missingAltCount", locations="missingAlt"),
                wcag_criterion="1.1.1",
                fix_minutes=10,
                business_impact=_HIGH,
                user_benefit=(
                    "Blind visitors hear what each image shows and image search "
                    "can index the content"
                ),
            ),
            IssueKind(
                "meaningless-alt-text",
                "Alternative text does not describe the image",
                Severity.SERIOUS,
                counted("summary.meaninglessAltCount"),
                wcag_criterion="1.1.1",
                fix_minutes=10,
            ),
            IssueKind(
                "complex-image-without-description",
                "Charts and diagrams have no long description",
                Severity.SERIOUS,
                counted("summary.complexImagesWithoutDesc"),
                wcag_criterion="1.1.1",
                fix_minutes=60,
            ),
            IssueKind(
                "inaccessible-svg",
                "SVG graphics have no accessible name",
                Severity.MODERATE,
                counted("summary.svgIssues"),
                wcag_criterion="1.1.1",
                fix_minutes=15,
            ),
            IssueKind(
                "decorative-image-with-alt",
                "Decorative images are announced to screen readers",
                Severity.MINOR,
                counted("summary.decorativeWithAlt"),
                wcag_criterion="1.1.1",
                fix_minutes=5,
            ),
            IssueKind(
                "image-map-issue",
                "Image map areas have no alternative text",
                Severity.SERIOUS,
                counted("summary.imageMapIssues"),
                wcag_criterion="2.4.4",
                fix_minutes=30,
            ),
            IssueKind(
                "text-in-image",
                "Images appear to contain text",
                Severity.MODERATE,
                counted("summary.suspectedTextImages"),
                wcag_criterion="1.4.5",
                fix_minutes=120,
            ),
        ),
        applicability=_not_applicable_when_zero("summary.totalImages"),
    ),
    ProbeCatalog(
        Category.TABLES,
        (
            IssueKind(
                "table-missing-caption",
                "Data tables have no caption",
                Severity.MODERATE,
                shortfall("tableAnalysis.total", "tableAnalysis.withCaption"),
                wcag_criterion="1.3.1",
                fix_minutes=10,
            ),
            IssueKind(
                "table-missing-headers",
                "Data tables have no header cells",
                Severity.SERIOUS,
                shortfall("tableAnalysis.total", "tableAnalysis.withHeaders"),
                wcag_criterion="1.3.1",
                fix_minutes=30,
                business_impact=_MEDIUM,
            ),
            IssueKind(
                "complex-table-missing-scope",
                "Complex tables do not scope their headers",
                Severity.SERIOUS,
                _unscoped_complex_tables,
                wcag_criterion="1.3.1",
                fix_minutes=60,
            ),
            IssueKind(
                "empty-header-cell",
                "Table header cells are empty",
                Severity.MODERATE,
                counted("cellAnalysis.emptyHeaderCells"),
                wcag_criterion="1.3.1",
                fix_minutes=10,
            ),
            IssueKind(
                "layout-table",
                "Tables are used for page layout",
                Severity.MODERATE,
                counted("tablesForLayout"),
                wcag_criterion="1.3.2",
                fix_minutes=240,
            ),
            IssueKind(
                "table-missing-thead",
                "Header rows are not grouped in thead",
                Severity.MINOR,
                _missing_thead,
                wcag_criterion="1.3.1",
                fix_minutes=10,
            ),
        ),
        applicability=_not_applicable_when_zero("totalTables", "tableAnalysis.total"),
    ),
    ProbeCatalog(
        Category.STRUCTURE,
        (
            IssueKind(
                "missing-main-element",
                "Page has no main element",
                Severity.SERIOUS,
                flag_is("hasMain", False),
                wcag_criterion="1.3.1",
                fix_minutes=15,
            ),
            IssueKind(
                "missing-nav-element",
                "Page has no nav element",
                Severity.MODERATE,
                flag_is("hasNav", False),
                wcag_criterion="1.3.1",
                fix_minutes=15,
            ),
            IssueKind(
                "missing-header-element",
                "Page has no header element",
                Severity.MODERATE,
                flag_is("hasHeader", False),
                wcag_criterion="1.3.1",
                fix_minutes=15,
            ),
            IssueKind(
                "missing-footer-element",
                "Page has no footer element",
                Severity.MINOR,
                flag_is("hasFooter", False),
                wcag_criterion="1.3.1",
                fix_minutes=15,
            ),
            IssueKind(
                "missing-h1",
                "Page has no level-one heading",
                Severity.SERIOUS,
                flag_is("hasH1", False),
                wcag_criterion="1.3.1",
                fix_minutes=10,
                business_impact=_MEDIUM,
                user_benefit=(
                    "Screen reader users and search engines learn the page topic "
                    "from its first heading"
                ),
            ),
            IssueKind(
                "multiple-h1",
                "Page has more than one level-one heading",
                Severity.MINOR,
                exceeds("h1Count", 1),
                wcag_criterion="1.3.1",
                fix_minutes=15,
            ),
            IssueKind(
                "heading-level-skip",
                "Heading levels are skipped",
                Severity.MODERATE,
                listed("headingHierarchy.violations"),
                wcag_criterion="1.3.1",
                fix_minutes=15,
            ),
            IssueKind(
                "missing-document-title",
                "Document has no title",
                Severity.SERIOUS,
                flag_is("documentStructure.hasTitle", False, location="<head>"),
                wcag_criterion="2.4.2",
                fix_minutes=5,
                business_impact=_HIGH,
            ),
            IssueKind(
                "missing-document-language",
                "Document language is not declared",
                Severity.SERIOUS,
                flag_is("documentStructure.hasLang", False, location="<html>"),
                wcag_criterion="3.1.1",
                fix_minutes=5,
            ),
        ),
    ),
    ProbeCatalog(
        Category.NAVIGATION,
        (
            IssueKind(
                "missing-primary-navigation",
                "Page has no primary navigation",
                Severity.SERIOUS,
                _missing_primary_nav,
                wcag_criterion="2.4.5",
                fix_minutes=240,
                business_impact=_HIGH,
            ),
            IssueKind(
                "navigation-without-landmark-role",
                "Primary navigation is not exposed as a landmark",
                Severity.MODERATE,
                _nav_without_role,
                wcag_criterion="1.3.1",
                fix_minutes=10,
            ),
            IssueKind(
                "navigation-without-label",
                "Primary navigation has no accessible label",
                Severity.MINOR,
                _nav_without_label,
                wcag_criterion="2.4.6",
                fix_minutes=10,
            ),
            IssueKind(
                "empty-primary-navigation",
                "Primary navigation contains no links",
                Severity.SERIOUS,
                _empty_primary_nav,
                wcag_criterion="2.4.5",
                fix_minutes=60,
            ),
            IssueKind(
                "missing-breadcrumbs",
                "Page has no breadcrumb trail",
                Severity.MINOR,
                flag_is("breadcrumbAnalysis.hasBreadcrumbs", False),
                wcag_criterion="2.4.8",
                fix_minutes=60,
            ),
            IssueKind(
                "missing-skip-navigation",
                "Page has no way to skip repeated navigation",
                Severity.SERIOUS,
                flag_is("skipNavigationAnalysis.hasSkipLinks", False),
                wcag_criterion="2.4.1",
                fix_minutes=30,
                user_benefit=_KEYBOARD_BENEFIT,
            ),
            IssueKind(
                "broken-skip-navigation",
                "Skip navigation links are broken",
                Severity.SERIOUS,
                listed(
                    "skipNavigationAnalysis.issues",
                    where=_item_is("type", "broken_skip_link"),
                ),
                wcag_criterion="2.4.1",
                fix_minutes=15,
            ),
            IssueKind(
                "inconsistent-navigation",
                "Navigation differs between pages",
                Severity.MODERATE,
                listed("consistencyAnalysis.inconsistencies"),
                wcag_criterion="3.2.3",
                fix_minutes=120,
            ),
        ),
        free_form_issues=True,
    ),
    ProbeCatalog(
        Category.CONTENT_STRUCTURE,
        (
            IssueKind(
                "long-paragraph",
                "Paragraphs are too long to scan",
                Severity.MINOR,
                listed("content.paragraphs", where=_item_above("sentenceCount", 12)),
                wcag_criterion="3.1.5",
                fix_minutes=20,
            ),
            IssueKind(
                "large-content-chunk",
                "Content is not broken into digestible sections",
                Severity.MINOR,
                listed("content.contentChunks", where=_item_is("isLargeChunk", True)),
                wcag_criterion="2.4.10",
                fix_minutes=30,
            ),
            IssueKind(
                "long-line-length",
                "Lines of text are too long",
                Severity.MODERATE,
                exceeds("summary.averageLineLength", 100),
                wcag_criterion="1.4.8",
                fix_minutes=30,
            ),
            IssueKind(
                "inadequate-line-height",
                "Text blocks use cramped line height",
                Severity.MODERATE,
                listed("whiteSpace.lineHeights", where=_item_is("isAdequate", False)),
                wcag_criterion="1.4.12",
                fix_minutes=15,
                user_benefit=_VISION_BENEFIT,
            ),
            IssueKind(
                "inadequate-section-spacing",
                "Sections have too little spacing",
                Severity.MINOR,
                listed(
                    "whiteSpace.sectionSpacing", where=_item_is("isAdequate", False)
                ),
                wcag_criterion="1.4.8",
                fix_minutes=15,
            ),
        ),
    ),
    ProbeCatalog(
        Category.TEXT_READABILITY,
        (
            IssueKind(
                "zoom-layout-break",
                "Layout breaks when text is zoomed to 200%",
                Severity.SERIOUS,
                counted("summary.zoomIssues"),
                wcag_criterion="1.4.4",
                fix_minutes=240,
                business_impact=_MEDIUM,
                user_benefit=_VISION_BENEFIT,
            ),
            IssueKind(
                "decorative-font",
                "Body text uses hard-to-read decorative fonts",
                Severity.MODERATE,
                counted("summary.decorativeFontIssues"),
                wcag_criterion="1.4.8",
                fix_minutes=15,
            ),
            IssueKind(
                "small-font-size",
                "Text is set below a readable size",
                Severity.MODERATE,
                counted("summary.smallFontIssues"),
                wcag_criterion="1.4.4",
                fix_minutes=15,
                user_benefit=_VISION_BENEFIT,
            ),
            IssueKind(
                "justified-text",
                "Text is fully justified",
                Severity.MINOR,
                counted("summary.justifiedTextIssues"),
                wcag_criterion="1.4.8",
                fix_minutes=5,
            ),
            IssueKind(
                "tight-line-height",
                "Text uses tight line height",
                Severity.MODERATE,
                counted("summary.lineHeightIssues"),
                wcag_criterion="1.4.12",
                fix_minutes=15,
            ),
            IssueKind(
                "tight-text-spacing",
                "Letter or word spacing is too tight",
                Severity.MINOR,
                counted("summary.spacingIssues"),
                wcag_criterion="1.4.12",
                fix_minutes=15,
            ),
            IssueKind(
                "responsive-text-issue",
                "Text does not reflow on small screens",
                Severity.SERIOUS,
                counted("summary.responsiveIssues"),
                wcag_criterion="1.4.10",
                fix_minutes=120,
            ),
        ),
    ),
    ProbeCatalog(
        Category.MOBILE,
        (
            IssueKind(
                "small-touch-target",
                "Touch targets are smaller than 44 by 44 pixels",
                Severity.MODERATE,
                listed("touchTargets.tooSmall"),
                wcag_criterion="2.5.5",
                fix_minutes=30,
                business_impact=_MEDIUM,
            ),
        ),
        free_form_issues=True,
    ),
    ProbeCatalog(
        Category.SEO,
        (
            IssueKind(
                "missing-title",
                "Page has no title tag",
                Severity.CRITICAL,
                flag_is("title.present", False, location="<head>"),
                fix_minutes=5,
                business_impact=_HIGH,
                user_benefit=_SEARCH_BENEFIT,
            ),
            IssueKind(
                "title-length",
                "Title is outside 30-60 characters",
                Severity.MINOR,
                outside("title.length", 30, 60),
                fix_minutes=5,
            ),
            IssueKind(
                "missing-meta-description",
                "Page has no meta description",
                Severity.SERIOUS,
                flag_is("metaDescription.present", False, location="<head>"),
                fix_minutes=10,
                business_impact=_MEDIUM,
                user_benefit=_SEARCH_BENEFIT,
            ),
            IssueKind(
                "meta-description-length",
                "Meta description is outside 120-160 characters",
                Severity.MINOR,
                outside("metaDescription.length", 120, 160),
                fix_minutes=10,
            ),
            IssueKind(
                "missing-canonical",
                "Page has no canonical URL",
                Severity.MODERATE,
                flag_is("canonical.present", False, location="<head>"),
                fix_minutes=10,
            ),
            IssueKind(
                "missing-open-graph",
                "Page has no Open Graph tags",
                Severity.MINOR,
                flag_is("openGraph.present", False, location="<head>"),
                fix_minutes=15,
                business_impact=_LOW,
            ),
        ),
    ),
    ProbeCatalog(
        Category.TECHNICAL,
        (
            IssueKind(
                "not-https",
                "Page is not served over HTTPS",
                Severity.CRITICAL,
                flag_is("https", False),
                fix_minutes=120,
                business_impact=_HIGH,
            ),
            IssueKind(
                "missing-robots-txt",
                "Site has no robots.txt",
                Severity.MODERATE,
                flag_is("robotsTxt.exists", False),
                fix_minutes=15,
            ),
            IssueKind(
                "missing-sitemap",
                "Site has no XML sitemap",
                Severity.MODERATE,
                flag_is("sitemap.exists", False),
                fix_minutes=30,
                business_impact=_LOW,
            ),
            IssueKind(
                "missing-structured-data",
                "Page has no structured data",
                Severity.MINOR,
                flag_is("structuredData.present", False),
                fix_minutes=60,
            ),
            IssueKind(
                "broken-resource",
                "Page references resources that fail to load",
                Severity.SERIOUS,
                listed("brokenResources"),
                fix_minutes=30,
            ),
        ),
    ),
)

CATALOGS: dict[Category, ProbeCatalog] = {
    catalog.category: catalog for catalog in _CATALOG_LIST
}
"""Registry of issue catalogs keyed by probe category."""


def catalog_for(category: Category) -> ProbeCatalog:
    return CATALOGS[category]
