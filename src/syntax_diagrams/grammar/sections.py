"""Section index: titled groups of rule names, and the name filter."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from syntax_diagrams.errors import InvalidGrammarError, UnknownSectionError
from syntax_diagrams.model.registry import RuleRegistry


def filter_names(names: Iterable[str], query: str) -> list[str]:
    """Names whose lowercase form contains the lowercased, stripped query.

    An empty (or all-whitespace) query returns every name. Order is preserved.
    """
    q = query.strip().lower()
    if not q:
        return list(names)
    return [n for n in names if q in n.lower()]


@dataclass(frozen=True)
class Section:
    id: str
    title: str
    rules: tuple[str, ...]


class SectionIndex:
    """An ordered, read-only set of sections."""

    def __init__(self, sections: Iterable[Section]) -> None:
        self._sections: dict[str, Section] = {}
        for section in sections:
            if section.id in self._sections:
                raise InvalidGrammarError(f"section '{section.id}' defined more than once")
            self._sections[section.id] = section

    def sections_in_order(self) -> list[str]:
        return list(self._sections)

    def section(self, section_id: str) -> Section:
        try:
            return self._sections[section_id]
        except KeyError:
            raise UnknownSectionError(section_id) from None

    def title_of(self, section_id: str) -> str:
        return self.section(section_id).title

    def rules_of(self, section_id: str) -> list[str]:
        return list(self.section(section_id).rules)

    def filtered(self, query: str) -> dict[str, list[str]]:
        """Each section's rules filtered by ``query``, sections kept in order."""
        return {sid: filter_names(s.rules, query) for sid, s in self._sections.items()}

    def all_rules(self) -> list[str]:
        """Every rule name in section order, first occurrence only."""
        seen: dict[str, None] = {}
        for section in self._sections.values():
            for name in section.rules:
                seen.setdefault(name)
        return list(seen)

    def missing_rules(self, registry: RuleRegistry) -> dict[str, list[str]]:
        """Section id -> members that the registry does not define."""
        result: dict[str, list[str]] = {}
        for sid, section in self._sections.items():
            missing = [n for n in section.rules if not registry.has(n)]
            if missing:
                result[sid] = missing
        return result

    def uncovered_rules(self, registry: RuleRegistry) -> list[str]:
        """Registered names that appear in no section."""
        covered = set(self.all_rules())
        return [n for n in registry.names() if n not in covered]

    def __len__(self) -> int:
        return len(self._sections)


def _section(id: str, title: str, *rules: str) -> Section:
    return Section(id=id, title=title, rules=rules)


PYTHON_SECTIONS = SectionIndex(
    [
        _section("starting", "Starting Rules", "file", "interactive", "eval", "func_type"),
        _section(
            "statements",
            "General Statements",
            "statements",
            "statement",
            "statement_newline",
            "simple_stmts",
            "simple_stmt",
            "compound_stmt",
        ),
        _section(
            "simple_stmts",
            "Simple Statements",
            "assignment",
            "annotated_rhs",
            "augassign",
            "return_stmt",
            "raise_stmt",
            "pass_stmt",
            "break_stmt",
            "continue_stmt",
            "global_stmt",
            "nonlocal_stmt",
            "del_stmt",
            "yield_stmt",
            "assert_stmt",
        ),
        _section(
            "imports",
            "Import Statements",
            "import_stmt",
            "import_name",
            "import_from",
            "import_from_targets",
            "import_from_as_names",
            "import_from_as_name",
            "dotted_as_names",
            "dotted_as_name",
            "dotted_name",
        ),
        _section(
            "compound",
            "Compound Statements",
            "block",
            "decorators",
            "class_def",
            "class_def_raw",
            "function_def",
            "function_def_raw",
        ),
        _section(
            "params",
            "Function Parameters",
            "params",
            "parameters",
            "slash_no_default",
            "slash_with_default",
            "star_etc",
            "kwds",
            "param_no_default",
            "param_no_default_star_annotation",
            "param_with_default",
            "param_maybe_default",
            "param",
            "param_star_annotation",
            "annotation",
            "star_annotation",
            "default",
        ),
        _section(
            "control",
            "Control Flow (if/while/for/with/try)",
            "if_stmt",
            "elif_stmt",
            "else_block",
            "while_stmt",
            "for_stmt",
            "with_stmt",
            "with_item",
            "try_stmt",
            "except_block",
            "except_star_block",
            "finally_block",
        ),
        _section(
            "match",
            "Pattern Matching",
            "match_stmt",
            "subject_expr",
            "case_block",
            "guard",
            "patterns",
            "pattern",
            "as_pattern",
            "or_pattern",
            "closed_pattern",
            "literal_pattern",
            "literal_expr",
            "complex_number",
            "signed_number",
            "signed_real_number",
            "real_number",
            "imaginary_number",
            "capture_pattern",
            "pattern_capture_target",
            "wildcard_pattern",
            "value_pattern",
            "attr",
            "name_or_attr",
            "group_pattern",
            "sequence_pattern",
            "open_sequence_pattern",
            "maybe_sequence_pattern",
            "maybe_star_pattern",
            "star_pattern",
            "mapping_pattern",
            "items_pattern",
            "key_value_pattern",
            "double_star_pattern",
            "class_pattern",
            "positional_patterns",
            "keyword_patterns",
            "keyword_pattern",
        ),
        _section(
            "types",
            "Type Statements",
            "type_alias",
            "type_params",
            "type_param_seq",
            "type_param",
            "type_param_bound",
            "type_param_default",
            "type_param_starred_default",
        ),
        _section(
            "expressions",
            "Expressions",
            "expressions",
            "expression",
            "yield_expr",
            "star_expressions",
            "star_expression",
            "star_named_expressions",
            "star_named_expression",
            "assignment_expression",
            "named_expression",
            "disjunction",
            "conjunction",
            "inversion",
        ),
        _section(
            "comparison",
            "Comparison Operators",
            "comparison",
            "compare_op_bitwise_or_pair",
            "eq_bitwise_or",
            "noteq_bitwise_or",
            "lte_bitwise_or",
            "lt_bitwise_or",
            "gte_bitwise_or",
            "gt_bitwise_or",
            "notin_bitwise_or",
            "in_bitwise_or",
            "isnot_bitwise_or",
            "is_bitwise_or",
        ),
        _section("bitwise", "Bitwise Operators", "bitwise_or", "bitwise_xor", "bitwise_and", "shift_expr"),
        _section("arithmetic", "Arithmetic Operators", "sum", "term", "factor", "power"),
        _section("primary", "Primary Elements", "await_primary", "primary", "slices", "slice", "atom", "group"),
        _section(
            "lambda",
            "Lambda Functions",
            "lambdef",
            "lambda_params",
            "lambda_parameters",
            "lambda_slash_no_default",
            "lambda_slash_with_default",
            "lambda_star_etc",
            "lambda_kwds",
            "lambda_param_no_default",
            "lambda_param_with_default",
            "lambda_param_maybe_default",
            "lambda_param",
        ),
        _section(
            "literals",
            "Literals",
            "fstring_middle",
            "fstring_replacement_field",
            "fstring_conversion",
            "fstring_full_format_spec",
            "fstring_format_spec",
            "fstring",
            "tstring_format_spec_replacement_field",
            "tstring_format_spec",
            "tstring_full_format_spec",
            "tstring_replacement_field",
            "tstring_middle",
            "tstring",
            "string",
            "strings",
        ),
        _section(
            "collections",
            "Collections",
            "list",
            "tuple",
            "set",
            "dict",
            "double_starred_kvpairs",
            "double_starred_kvpair",
            "kvpair",
        ),
        _section(
            "comprehensions",
            "Comprehensions & Generators",
            "for_if_clauses",
            "for_if_clause",
            "listcomp",
            "setcomp",
            "genexp",
            "dictcomp",
        ),
        _section(
            "arguments",
            "Function Call Arguments",
            "arguments",
            "args",
            "kwargs",
            "starred_expression",
            "kwarg_or_starred",
            "kwarg_or_double_starred",
        ),
        _section(
            "targets",
            "Assignment Targets",
            "star_targets",
            "star_targets_list_seq",
            "star_targets_tuple_seq",
            "star_target",
            "target_with_star_atom",
            "star_atom",
            "single_target",
            "single_subscript_attribute_target",
            "t_primary",
            "t_lookahead",
            "del_targets",
            "del_target",
            "del_t_atom",
        ),
        _section("typing", "Typing Elements", "type_expressions", "func_type_comment"),
    ]
)
