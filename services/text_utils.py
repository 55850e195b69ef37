import re

_ROMAN = re.compile(r'^[ivxlcdm]+$')


def normalize_text(txt) -> str:
    """Collapse flavor text to a single line.
    Form feeds, vertical tabs and NULs become spaces, whitespace runs shrink to one.
    """
    if not isinstance(txt, str):
        txt = str(txt or '')
    txt = txt.replace('\f', ' ').replace('\v', ' ').replace('\x00', ' ')
    return ' '.join(txt.split())


def format_name(slug) -> str:
    """API slug -> spaced lowercase name ('viridian-forest-area' -> 'viridian forest area')."""
    return (slug or '').replace('-', ' ')


def humanize(slug) -> str:
    return format_name(slug).title()


def format_generation_name(generation) -> str:
    # 'generation-iv' -> 'Generation IV'
    if not generation:
        return ''
    head, *rest = generation.split('-')
    words = [head.capitalize()]
    words += [p.upper() if _ROMAN.match(p) else p.capitalize() for p in rest]
    return ' '.join(words)


def format_pokemon_id(poke_id: int) -> str:
    return f"#{int(poke_id):03d}"


def format_height(decimetres: int) -> str:
    return f"{decimetres / 10:.1f} m"


def format_weight(hectograms: int) -> str:
    return f"{hectograms / 10:.1f} kg"
