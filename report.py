# report.py
# plain-text report for one query, in the layout written to results.txt

from typing import List

from indexer import InvertedIndex

SEPARATOR = "-----------"
NOT_COMPUTABLE = (
    "The provided query does not have underlying document stats collected.",
    "Precision could not be calculated.",
    "Recall could not be calculated.",
)


def format_result_lines(result, index: InvertedIndex) -> List[str]:
    lines = [f"QUERY: {result.query}"]
    if not result.selected:
        lines.append("No matching documents.")
    for s in result.selected:
        doc = index.document(s.doc_id)
        lines.append(f"FILE NAME: {doc.file_name}")
        lines.append(f"TOTAL PARAGRAPH COUNT: {doc.paragraph_count}")
        lines.append(f"APPROXIMATE WORD COUNT: {doc.word_count}")
        snippet = result.snippets.get(s.doc_id)
        if snippet is not None:
            lines.extend(snippet.lines())
        lines.append(SEPARATOR)

    ev = result.evaluation
    if ev is None:
        lines.extend(NOT_COMPUTABLE)
    else:
        lines.append(f"PRECISION: {ev.precision * 100:.2f}%")
        lines.append(f"RECALL: {ev.recall * 100:.2f}%")
    lines.append("")
    return lines


def format_result(result, index: InvertedIndex) -> str:
    return "\n".join(format_result_lines(result, index)) + "\n"


def write_report(out, result, index: InvertedIndex):
    """append one query's report to an open text stream"""
    out.write(format_result(result, index))
    out.flush()
