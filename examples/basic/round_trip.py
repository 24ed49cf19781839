"""Parse, render and re-serialize text containing :math[...] spans.

Run: python examples/basic/round_trip.py
"""

from mathinline import Markdown, decode, encode, scan, to_span


def main() -> None:
    md = Markdown()

    source = r"Pairs :math[f(x) = [a, b]], escapes :math[a\]b] and TeX :math[\alpha]."
    doc = md.parse(source)

    print("HTML:")
    print(md.render(doc))
    print()
    print("Serialized back:")
    print(md.stringify(doc))
    print()

    # The core triad on its own
    for value in ["a]b", "x\\", "[a][b]", "["]:
        span = scan(to_span(value))
        assert span is not None
        print(f"{value!r:10} -> {encode(value)!r:12} -> {decode(span.data)!r}")


if __name__ == "__main__":
    main()
