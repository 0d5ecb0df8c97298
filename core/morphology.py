"""Approximate Croatian morphology.

Two questions are answered here:

* matches_form(lemma, token, category): is a running-text token an
  inflected form of a lemma?
* inflect(lemma, category, reference_form): what does lemma look like in
  the grammatical slot that reference_form appears to be in?

Both work from ordered rule tables. Verb conjugation classes are keyed by
infinitive ending, noun declension classes by final letter and gender, and
adjective classes by the stem-final consonant. The first class whose
pattern fits the lemma wins, so longer endings are listed first. A class
maps slot names to the suffix added to the stem; a suffix may carry a
consonant alternation applied to the last letter of the stem.

The output is approximate. Synthesized forms are only ever offered as
wrong options, never as the expected answer.
"""

import re

VOWELS = 'aeiou'
REFLEXIVE_PARTICLES = ('se', 'si')

# Final consonant alternations
SIBILARIZATION = {'k': 'c', 'g': 'z', 'h': 's'}
PALATALIZATION = {'k': 'č', 'g': 'ž', 'h': 'š', 'c': 'č'}
ALTERNATIONS = {
    'sib': SIBILARIZATION,
    'pal': PALATALIZATION,
}

PRESENT = ('pres.1sg', 'pres.2sg', 'pres.3sg', 'pres.1pl', 'pres.2pl', 'pres.3pl')
PAST = ('past.m.sg', 'past.f.sg', 'past.n.sg', 'past.m.pl', 'past.f.pl')
IMPERATIVE = ('imp.2sg', 'imp.1pl', 'imp.2pl')


def _verb_class(ending: str, present: tuple, past: tuple, imperative: tuple) -> dict:
    slots = {'inf': ending}
    if ending.endswith('ti'):
        slots['inf.short'] = ending[:-1]
    slots.update(zip(PRESENT, present))
    slots.update(zip(PAST, past))
    slots.update(zip(IMPERATIVE, imperative))
    return {
        'name': ending,
        'lemma': re.compile(re.escape(ending) + '$'),
        'cut': len(ending),
        'slots': slots
    }


# ============================================================================
# Verbs
# ============================================================================

VERB_CLASSES = [
    _verb_class('ovati',
                ('ujem', 'uješ', 'uje', 'ujemo', 'ujete', 'uju'),
                ('ovao', 'ovala', 'ovalo', 'ovali', 'ovale'),
                ('uj', 'ujmo', 'ujte')),
    _verb_class('evati',
                ('ujem', 'uješ', 'uje', 'ujemo', 'ujete', 'uju'),
                ('evao', 'evala', 'evalo', 'evali', 'evale'),
                ('uj', 'ujmo', 'ujte')),
    _verb_class('ivati',
                ('ujem', 'uješ', 'uje', 'ujemo', 'ujete', 'uju'),
                ('ivao', 'ivala', 'ivalo', 'ivali', 'ivale'),
                ('uj', 'ujmo', 'ujte')),
    _verb_class('jeti',
                ('im', 'iš', 'i', 'imo', 'ite', 'e'),
                ('io', 'jela', 'jelo', 'jeli', 'jele'),
                ('i', 'imo', 'ite')),
    _verb_class('nuti',
                ('nem', 'neš', 'ne', 'nemo', 'nete', 'nu'),
                ('nuo', 'nula', 'nulo', 'nuli', 'nule'),
                ('ni', 'nimo', 'nite')),
    _verb_class('ati',
                ('am', 'aš', 'a', 'amo', 'ate', 'aju'),
                ('ao', 'ala', 'alo', 'ali', 'ale'),
                ('aj', 'ajmo', 'ajte')),
    _verb_class('iti',
                ('im', 'iš', 'i', 'imo', 'ite', 'e'),
                ('io', 'ila', 'ilo', 'ili', 'ile'),
                ('i', 'imo', 'ite')),
    _verb_class('uti',
                ('ujem', 'uješ', 'uje', 'ujemo', 'ujete', 'uju'),
                ('uo', 'ula', 'ulo', 'uli', 'ule'),
                ('uj', 'ujmo', 'ujte')),
    _verb_class('eti',
                ('em', 'eš', 'e', 'emo', 'ete', 'u'),
                ('eo', 'ela', 'elo', 'eli', 'ele'),
                ('i', 'imo', 'ite')),
    _verb_class('ći',
                ('čem', 'češ', 'če', 'čemo', 'čete', 'ku'),
                ('kao', 'kla', 'klo', 'kli', 'kle'),
                ('ci', 'cimo', 'cite')),
]

# High-frequency verbs whose forms no class predicts.
# 'extra' forms are recognised but never generated.
IRREGULAR_VERBS = {
    'biti': {
        'present': ('sam', 'si', 'je', 'smo', 'ste', 'su'),
        'past': ('bio', 'bila', 'bilo', 'bili', 'bile'),
        'imperative': ('budi', 'budimo', 'budite'),
        'extra': ('jesam', 'jesi', 'jest', 'jeste', 'jesmo', 'jesu', 'nisam', 'nisi',
                  'nije', 'nismo', 'niste', 'nisu', 'budem', 'budeš', 'bude', 'budemo',
                  'budete', 'budu', 'bih', 'bi', 'bismo', 'biste'),
    },
    'htjeti': {
        'present': ('hoću', 'hoćeš', 'hoće', 'hoćemo', 'hoćete', 'hoće'),
        'past': ('htio', 'htjela', 'htjelo', 'htjeli', 'htjele'),
        'imperative': (),
        'extra': ('ću', 'ćeš', 'će', 'ćemo', 'ćete', 'neću', 'nećeš', 'neće', 'nećemo',
                  'nećete'),
    },
    'moći': {
        'present': ('mogu', 'možeš', 'može', 'možemo', 'možete', 'mogu'),
        'past': ('mogao', 'mogla', 'moglo', 'mogli', 'mogle'),
        'imperative': (),
        'extra': (),
    },
    'ići': {
        'present': ('idem', 'ideš', 'ide', 'idemo', 'idete', 'idu'),
        'past': ('išao', 'išla', 'išlo', 'išli', 'išle'),
        'imperative': ('idi', 'idimo', 'idite'),
        'extra': (),
    },
    'doći': {
        'present': ('dođem', 'dođeš', 'dođe', 'dođemo', 'dođete', 'dođu'),
        'past': ('došao', 'došla', 'došlo', 'došli', 'došle'),
        'imperative': ('dođi', 'dođimo', 'dođite'),
        'extra': (),
    },
    'otići': {
        'present': ('odem', 'odeš', 'ode', 'odemo', 'odete', 'odu'),
        'past': ('otišao', 'otišla', 'otišlo', 'otišli', 'otišle'),
        'imperative': ('otiđi', 'otiđimo', 'otiđite'),
        'extra': (),
    },
    'jesti': {
        'present': ('jedem', 'jedeš', 'jede', 'jedemo', 'jedete', 'jedu'),
        'past': ('jeo', 'jela', 'jelo', 'jeli', 'jele'),
        'imperative': ('jedi', 'jedimo', 'jedite'),
        'extra': (),
    },
    'piti': {
        'present': ('pijem', 'piješ', 'pije', 'pijemo', 'pijete', 'piju'),
        'past': ('pio', 'pila', 'pilo', 'pili', 'pile'),
        'imperative': ('pij', 'pijmo', 'pijte'),
        'extra': (),
    },
    'pisati': {
        'present': ('pišem', 'pišeš', 'piše', 'pišemo', 'pišete', 'pišu'),
        'past': ('pisao', 'pisala', 'pisalo', 'pisali', 'pisale'),
        'imperative': ('piši', 'pišimo', 'pišite'),
        'extra': (),
    },
    'kazati': {
        'present': ('kažem', 'kažeš', 'kaže', 'kažemo', 'kažete', 'kažu'),
        'past': ('kazao', 'kazala', 'kazalo', 'kazali', 'kazale'),
        'imperative': ('kaži', 'kažimo', 'kažite'),
        'extra': (),
    },
    'uzeti': {
        'present': ('uzmem', 'uzmeš', 'uzme', 'uzmemo', 'uzmete', 'uzmu'),
        'past': ('uzeo', 'uzela', 'uzelo', 'uzeli', 'uzele'),
        'imperative': ('uzmi', 'uzmimo', 'uzmite'),
        'extra': (),
    },
    'smijati': {
        'present': ('smijem', 'smiješ', 'smije', 'smijemo', 'smijete', 'smiju'),
        'past': ('smijao', 'smijala', 'smijalo', 'smijali', 'smijale'),
        'imperative': ('smij', 'smijmo', 'smijte'),
        'extra': (),
    },
}


def _irregular_slots(lemma: str, table: dict) -> dict:
    slots = {'inf': lemma}
    if lemma.endswith('ti'):
        slots['inf.short'] = lemma[:-1]
    slots.update(zip(PRESENT, table['present']))
    slots.update(zip(PAST, table['past']))
    slots.update(zip(IMPERATIVE, table['imperative']))
    return slots


IRREGULAR_SLOTS = {lemma: _irregular_slots(lemma, table)
                   for lemma, table in IRREGULAR_VERBS.items()}

def _form_index() -> dict:
    """Irregular surface form -> slot, first listing wins."""
    index = {}
    for slots in IRREGULAR_SLOTS.values():
        for slot, form in slots.items():
            index.setdefault(form, slot)
    return index


IRREGULAR_FORM_INDEX = _form_index()


# ============================================================================
# Nouns
# ============================================================================

NOUN_CLASSES = {
    'a-stem': {
        'name': 'a-stem',
        'lemma': re.compile(r'a$'),
        'cut': 1,
        'slots': {
            'sg.nom': 'a', 'sg.gen': 'e', 'sg.dat': ('i', 'sib'), 'sg.acc': 'u',
            'sg.voc': 'o', 'sg.ins': 'om',
            'pl.nom': 'e', 'pl.gen': 'a', 'pl.dat': 'ama', 'pl.acc': 'e',
        },
    },
    'i-stem': {
        'name': 'i-stem',
        'lemma': re.compile(r'[^aeiou]$'),
        'cut': 0,
        'slots': {
            'sg.nom': '', 'sg.gen': 'i', 'sg.dat': 'i', 'sg.acc': '',
            'sg.voc': 'i', 'sg.ins': 'i', 'sg.ins.long': 'ju',
            'pl.nom': 'i', 'pl.gen': 'i', 'pl.dat': 'ima', 'pl.acc': 'i',
        },
    },
    'o-neuter': {
        'name': 'o-neuter',
        'lemma': re.compile(r'o$'),
        'cut': 1,
        'slots': {
            'sg.nom': 'o', 'sg.gen': 'a', 'sg.dat': 'u', 'sg.acc': 'o',
            'sg.voc': 'o', 'sg.ins': 'om',
            'pl.nom': 'a', 'pl.gen': 'a', 'pl.dat': 'ima', 'pl.acc': 'a',
        },
    },
    'e-neuter': {
        'name': 'e-neuter',
        'lemma': re.compile(r'e$'),
        'cut': 1,
        'slots': {
            'sg.nom': 'e', 'sg.gen': 'a', 'sg.dat': 'u', 'sg.acc': 'e',
            'sg.voc': 'e', 'sg.ins': 'em',
            'pl.nom': 'a', 'pl.gen': 'a', 'pl.dat': 'ima', 'pl.acc': 'a',
        },
    },
    'ao-masculine': {
        'name': 'ao-masculine',
        'lemma': re.compile(r'ao$'),
        'cut': 2,
        'slots': {
            'sg.nom': 'ao', 'sg.gen': 'la', 'sg.dat': 'lu', 'sg.acc': 'ao',
            'sg.voc': 'le', 'sg.ins': 'lom',
            'pl.nom': 'lovi', 'pl.gen': 'lova', 'pl.dat': 'lovima', 'pl.acc': 'love',
        },
    },
    'o-masculine': {
        'name': 'o-masculine',
        'lemma': re.compile(r'o$'),
        'cut': 1,
        'slots': {
            'sg.nom': 'o', 'sg.gen': 'a', 'sg.dat': 'u', 'sg.acc': 'o',
            'sg.voc': 'o', 'sg.ins': 'om',
            'pl.nom': 'i', 'pl.gen': 'a', 'pl.dat': 'ima', 'pl.acc': 'e',
        },
    },
    'soft-masculine': {
        'name': 'soft-masculine',
        'lemma': re.compile(r'[cčćđjšž]$'),
        'cut': 0,
        'fleeting': ('ac',),
        'slots': {
            'sg.nom': '', 'sg.gen': 'a', 'sg.dat': 'u', 'sg.acc': '', 'sg.acc.anim': 'a',
            'sg.voc': 'u', 'sg.ins': 'em',
            'pl.nom': 'i', 'pl.gen': 'a', 'pl.dat': 'ima', 'pl.acc': 'e',
            'pl.nom.long': 'evi', 'pl.gen.long': 'eva', 'pl.dat.long': 'evima',
            'pl.acc.long': 'eve',
        },
    },
    'hard-masculine': {
        'name': 'hard-masculine',
        'lemma': re.compile(r'[^aeiou]$'),
        'cut': 0,
        'fleeting': ('ak', 'ac'),
        'slots': {
            'sg.nom': '', 'sg.gen': 'a', 'sg.dat': 'u', 'sg.acc': '', 'sg.acc.anim': 'a',
            'sg.voc': ('e', 'pal'), 'sg.ins': 'om',
            'pl.nom': ('i', 'sib'), 'pl.gen': 'a', 'pl.dat': ('ima', 'sib'), 'pl.acc': 'e',
            'pl.nom.long': 'ovi', 'pl.gen.long': 'ova', 'pl.dat.long': 'ovima',
            'pl.acc.long': 'ove',
        },
    },
}

# Gender -> declension classes, in lookup order
NOUN_CLASS_ORDER = {
    'masculine': ['ao-masculine', 'o-masculine', 'soft-masculine', 'hard-masculine', 'a-stem'],
    'feminine': ['a-stem', 'i-stem'],
    'neuter': ['o-neuter', 'e-neuter'],
    'noun': ['a-stem', 'o-neuter', 'e-neuter', 'soft-masculine', 'hard-masculine'],
}


# ============================================================================
# Adjectives
# ============================================================================

ADJECTIVE_CLASSES = [
    {
        'name': 'soft-adjective',
        'definite_i': True,
        'lemma': re.compile(r'(?:[cčćđjšž]|[cčćđjšž]i)$'),
        'cut': 0,
        'fleeting': ('ac',),
        'slots': {
            'm.sg.nom': '', 'm.sg.nom.def': 'i', 'f.sg.nom': 'a', 'n.sg.nom': 'e',
            'm.sg.gen': 'eg', 'm.sg.gen.long': 'ega', 'm.sg.dat': 'em',
            'm.sg.dat.long': 'emu', 'f.sg.gen': 'e', 'f.sg.dat': 'oj', 'f.sg.acc': 'u',
            'f.sg.ins': 'om', 'pl.gen': 'ih', 'pl.dat': 'im', 'pl.dat.long': 'ima',
        },
    },
    {
        'name': 'hard-adjective',
        'definite_i': True,
        'lemma': re.compile(r'[^aeou]$'),
        'cut': 0,
        'fleeting': ('ar', 'an', 'ak', 'al', 'ac'),
        'slots': {
            'm.sg.nom': '', 'm.sg.nom.def': 'i', 'f.sg.nom': 'a', 'n.sg.nom': 'o',
            'm.sg.gen': 'og', 'm.sg.gen.long': 'oga', 'm.sg.dat': 'om',
            'm.sg.dat.long': 'omu', 'm.sg.loc.long': 'ome', 'f.sg.gen': 'e',
            'f.sg.dat': 'oj', 'f.sg.acc': 'u', 'pl.gen': 'ih', 'pl.dat': 'im',
            'pl.dat.long': 'ima',
        },
    },
]


# ============================================================================
# Helpers
# ============================================================================

def _kind(category: str | None) -> str | None:
    """Grammatical kind of a category: 'verb', a noun gender, or 'adjective'."""
    if not category:
        return None
    category = category.lower()
    if category.startswith('verb'):
        return 'verb'
    if category.startswith('adjective'):
        return 'adjective'
    for gender in ('masculine', 'feminine', 'neuter'):
        if gender in category:
            return gender
    if category.startswith('noun'):
        return 'noun'
    return None


def _paradigms(category: str | None) -> list[dict]:
    kind = _kind(category)
    if kind == 'verb':
        return VERB_CLASSES
    if kind == 'adjective':
        return ADJECTIVE_CLASSES
    if kind in NOUN_CLASS_ORDER:
        return [NOUN_CLASSES[name] for name in NOUN_CLASS_ORDER[kind]]
    return []


def _bare(lemma: str, paradigm: dict) -> str:
    """Lemma minus a definite -i, for adjectives cited as 'mali'."""
    if paradigm.get('definite_i') and len(lemma) > 3 and lemma.lower().endswith('i'):
        return lemma[:-1]
    return lemma


def _drop_fleeting_a(word: str, endings: tuple) -> str | None:
    """'petak' -> 'petk', 'dobar' -> 'dobr'; None when the rule does not apply."""
    lowered = word.lower()
    if len(word) < 5 or lowered[-2:] not in endings or lowered[-3] in VOWELS:
        return None
    return word[:-2] + word[-1]


def _stems(lemma: str, paradigm: dict) -> list[str]:
    """Candidate stems, the fleeting-a stem first when there is one."""
    word = _bare(lemma, paradigm)
    stem = word[:len(word) - paradigm['cut']]
    stems = [stem]
    fleeting = _drop_fleeting_a(stem, paradigm.get('fleeting', ()))
    if fleeting:
        stems.insert(0, fleeting)
    return stems


def _alternate(stem: str, alternation: str | None) -> str:
    if not alternation or not stem:
        return stem
    last = stem[-1]
    replacement = ALTERNATIONS[alternation].get(last.lower())
    if replacement is None:
        return stem
    if last.isupper():
        replacement = replacement.upper()
    return stem[:-1] + replacement


def _suffix(ending) -> tuple[str, str | None]:
    if isinstance(ending, tuple):
        return ending
    return (ending, None)


def _attach(stem: str, ending) -> str:
    suffix, alternation = _suffix(ending)
    return _alternate(stem, alternation) + suffix


def _classify(lemma: str, category: str | None) -> dict | None:
    """First inflection class of the category whose pattern fits the lemma."""
    lowered = lemma.lower()
    for paradigm in _paradigms(category):
        if paradigm['lemma'].search(lowered):
            return paradigm
    return None


def _all_forms(lemma: str, paradigm: dict) -> set[str]:
    forms = set()
    for stem in _stems(lemma, paradigm):
        for ending in paradigm['slots'].values():
            forms.add(_attach(stem, ending).lower())
            # Alternations are optional when matching
            forms.add(stem.lower() + _suffix(ending)[0])
    return forms


def split_reflexive(lemma: str) -> tuple[str, str | None, str | None]:
    """Split 'smijati se' into ('smijati', 'se', 'trailing').

    Returns (lemma, None, None) when there is no detachable particle.
    """
    words = (lemma or '').split()
    if len(words) == 2:
        if words[1].lower() in REFLEXIVE_PARTICLES:
            return (words[0], words[1], 'trailing')
        if words[0].lower() in REFLEXIVE_PARTICLES:
            return (words[1], words[0], 'leading')
    return (lemma, None, None)


def is_reflexive(lemma: str) -> bool:
    return split_reflexive(lemma)[1] is not None


def attach_particle(form: str, particle: str | None, position: str | None) -> str:
    if not particle or not position:
        return form
    if position == 'leading':
        return f"{particle} {form}"
    return f"{form} {particle}"


# ============================================================================
# Public API
# ============================================================================

def matches_form(lemma: str, token: str, category: str | None) -> bool:
    """True if token is the lemma or a recognised inflection of it."""
    if not lemma or not token:
        return False
    base, _, _ = split_reflexive(lemma.strip())
    base = base.lower()
    token = token.strip().lower()
    if token == base or token == lemma.strip().lower():
        return True
    if len(base) <= 2 or ' ' in base:
        return False

    kind = _kind(category)
    if kind == 'verb' and base in IRREGULAR_VERBS:
        table = IRREGULAR_VERBS[base]
        return token in IRREGULAR_SLOTS[base].values() or token in table['extra']

    if kind == 'adjective':
        # Adjectives may be cited in either the short or the definite form
        return any(token in _all_forms(base, p) for p in ADJECTIVE_CLASSES
                   if p['lemma'].search(base))

    paradigm = _classify(base, category)
    if paradigm is None:
        return False
    return token in _all_forms(base, paradigm)


def infer_slot(form: str, category: str | None) -> str | None:
    """Guess the grammatical slot of a surface form from its ending."""
    if not form:
        return None
    word = form.strip().lower()
    if _kind(category) == 'verb' and word in IRREGULAR_FORM_INDEX:
        return IRREGULAR_FORM_INDEX[word]

    best_slot = None
    best_length = 0
    for paradigm in _paradigms(category):
        for slot, ending in paradigm['slots'].items():
            suffix = _suffix(ending)[0]
            if len(suffix) > best_length and len(word) > len(suffix) and word.endswith(suffix):
                best_slot = slot
                best_length = len(suffix)
    return best_slot


def inflect(lemma: str, category: str | None, reference_form: str) -> str:
    """Build the form of lemma that fills the same slot as reference_form.

    Returns lemma unchanged when its class or the slot cannot be determined.
    """
    if not lemma or not reference_form:
        return lemma
    base, particle, position = split_reflexive(lemma.strip())
    if ' ' in base:
        return lemma

    slot = infer_slot(reference_form, category)
    if slot is None:
        return lemma

    lowered = base.lower()
    if _kind(category) == 'verb' and lowered in IRREGULAR_SLOTS:
        form = IRREGULAR_SLOTS[lowered].get(slot)
        if form is None:
            return lemma
        return attach_particle(form, particle, position)

    paradigm = _classify(base, category)
    if paradigm is None or slot not in paradigm['slots']:
        return lemma
    ending = paradigm['slots'][slot]
    if _suffix(ending)[0] == '' and paradigm['cut'] == 0:
        return lemma
    form = _attach(_stems(base, paradigm)[0], ending)
    return attach_particle(form, particle, position)


def suffix_pattern(form: str, category: str | None) -> re.Pattern:
    """Pattern matching the ending of forms in the same slot as form.

    Falls back to the literal last characters of form when no grammatical
    ending is recognised.
    """
    slot = infer_slot(form, category)
    endings = set()
    if slot is not None:
        for paradigm in _paradigms(category):
            ending = paradigm['slots'].get(slot)
            if ending is not None and _suffix(ending)[0]:
                endings.add(_suffix(ending)[0])
    if endings:
        alternatives = sorted((re.escape(e) for e in endings), key=len, reverse=True)
        return re.compile('(?:' + '|'.join(alternatives) + ')$', re.IGNORECASE)

    word = (form or '').strip()
    size = max(1, min(4, len(word) // 3))
    return re.compile(re.escape(word[-size:]) + '$', re.IGNORECASE)
