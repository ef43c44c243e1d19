# unitlore

Building blocks for a unit-conversion calculator. The package has no runtime
dependencies.

- `unitlore.numeric` provides `Numeric` and `Digits`. A `Numeric` holds either
  an exact rational or a machine float. It can be formatted in any base from
  2 to 36.
- `unitlore.search` provides `jaro_winkler` similarity, a ranked `search`
  over a collection of names, and the `SearchResult` record.
- `unitlore.merge` provides `merge_sorted`, which merges two mappings key by
  key.
- `unitlore.tokens` provides a tokenizer for definition files: `tokenize`,
  `Token` and `TokenKind`.
- `unitlore.gnu_units` provides a parser for definition files in the GNU
  units style: `parse_str`, `parse`, `parse_expr`, `parse_term`,
  `TokenStream` and `token_list`.
- `unitlore.defs` holds the expression trees and the `DefEntry` records that
  the parser produces.

## Installation

```
pip install unitlore
```

For development, install the test extra and run the tests:

```
pip install -e ".[test]"
pytest
```

## Numbers

```python
from fractions import Fraction
from unitlore.numeric import Numeric, Digits

Numeric(Fraction(123, 1000)).to_string(10, Digits())  # (True, '0.123')
Numeric(Fraction(1, 7)).string_repr(10, Digits())     # ('1/7', '0.1428571')
Numeric(Fraction(1, 7)).to_string(10, Digits(count=3))
```

By default `Digits()` gives about six significant digits. Large or small
values switch to scientific notation. `Digits(count=n)` prints `n` digits
after the integer part. `Digits(full_int=True)` never switches to scientific
notation.

Arithmetic between two rationals stays exact. If either operand is a float,
the result is a float. `div_rem` returns the quotient and the remainder.
`to_rational`, `to_int` and `to_float` convert the value. `to_parts` returns a
serializable dict with the keys `numer`, `denom`, `exactValue` and
`approxValue`.

## Searching names

```python
from unitlore.search import search, jaro_winkler

search(["meter", "metre", "mile", "gram"], "meter", 3)
```

Matching ignores case. Exact matches rank above prefix matches. Prefix
matches rank above suffix matches, and suffix matches above substring
matches. Within each of these groups, candidates are ranked by Jaro–Winkler
similarity. The results come best first, and only candidates that score above
800 are returned.

## Merging mappings

```python
from unitlore.merge import merge_sorted

merge_sorted({"a": 1, "b": 2}, {"b": 3, "c": 4}, lambda x, y: x + y)
# {'a': 1, 'b': 5, 'c': 4}
```

If `merge_func` returns `None` for a shared key, that key is dropped.

## Parsing definitions

```python
from unitlore.gnu_units import parse_str

entries = parse_str("""
!category si_base "SI base units"
?? base unit of length
m ! meter
kilo- 1000
k-- kilo
length ? meter
!endcategory
!symbol water H2O
water {
  density mass 1 g / volume 1 cm^3
}
""")
for entry in entries:
    print(entry.name, entry.definition, entry.doc, entry.category)
```

Each line of a definition file produces one kind of entry:

- `name !` declares a base dimension (`DimensionDef`). A long name may
  follow it, which adds a `CanonicalizationDef`.
- `name-` declares a prefix that is also a unit (`SPrefixDef`).
- `name--` declares a prefix only (`PrefixDef`).
- `name ? expr` declares a quantity (`QuantityDef`).
- `name { ... }` declares a substance with properties (`SubstanceDef`).
- Any other `name expr` declares a unit (`UnitDef`).

Doc lines (`??`) attach to the next entry. `!category` / `!endcategory`
set the category of the entries between them. `!symbol` attaches a symbol
to a substance. `#` starts a comment, and a backslash at the end of a line
continues the line.

Malformed lines do not raise. The parser reports them as warnings through
the `unitlore.gnu_units` logger and keeps going. A term that cannot be parsed
becomes an `ErrorExpr` that carries the message.

## What it does not do

The package reads definitions into `DefEntry` records and expression trees,
but it does not evaluate them. It does not resolve names into units or
check dimensions. It has no query language, no conversion engine and no
command-line program. It also ships no definitions file of its own.