"""
Cashbook references and screen filters

References are stored upstream as JSON text (a list of ``{id, type, name,
detail}``) next to a readable ``reference_details`` string.
"""
import datetime
import json

from .resources import TRANSACTION_TYPES

TODAY_TAB = 'today'


def serialize_references(references):
    """``(references JSON text, "name: detail; ...")``, both None when there are none"""
    if not references:
        return None, None
    text = json.dumps([dict(reference) for reference in references], separators=(',', ':'))
    details = '; '.join(f"{reference.get('name', '')}: {reference.get('detail', '')}" for reference in references)
    return text, details


def parse_references(text):
    """Stored references as a list, or None when the text is not a JSON list"""
    if not text:
        return []
    try:
        references = json.loads(text)
    except (TypeError, ValueError):
        return None
    return references if isinstance(references, list) else None


def amount_text(amount):
    try:
        number = float(amount)
    except (TypeError, ValueError):
        return ''
    return str(int(number)) if number.is_integer() else str(number)


def entry_date(entry):
    return str(entry.get('transaction_date') or '')[:10]


def entry_matches(entry, query):
    query_lower = query.lower()
    if query_lower in str(entry.get('description') or '').lower():
        return True
    if query_lower in str(entry.get('special_notes') or '').lower():
        return True
    if query in amount_text(entry.get('amount')):
        return True

    raw = entry.get('references')
    if not raw:
        return False
    references = parse_references(raw)
    if references is None:
        return query_lower in str(raw).lower()
    return any(
        query_lower in str(reference.get(key) or '').lower()
        for reference in references if isinstance(reference, dict)
        for key in ('name', 'detail', 'type')
    )


def filter_entries(entries, transaction_type=None, tab=None, start_date=None, end_date=None, query='', today=None):
    """Type, the today/all tabs (with an optional range on all) and the search box; newest first"""
    results = list(entries)
    if transaction_type in TRANSACTION_TYPES:
        results = [e for e in results if e.get('transaction_type') == transaction_type]
    if tab == TODAY_TAB and today:
        results = [e for e in results if entry_date(e) == today]
    elif start_date and end_date:
        results = [e for e in results if start_date <= entry_date(e) <= end_date]
    query = (query or '').strip()
    if query:
        results = [e for e in results if entry_matches(e, query)]
    results.sort(key=entry_date, reverse=True)
    return results


def summary_range(tab, start_date, end_date, today):
    """
    Period the summary covers. The today tab, or no tab at all, is today;
    otherwise the chosen range, or last year through next year without one.
    """
    if not tab or tab == TODAY_TAB:
        return today, today
    if start_date and end_date:
        return start_date, end_date
    year = datetime.date.fromisoformat(today).year
    return f'{year - 1}-01-01', f'{year + 1}-12-31'
