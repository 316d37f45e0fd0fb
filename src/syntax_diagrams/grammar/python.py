"""The Python grammar, transcribed from CPython's Grammar/python.gram.

Rules are written in diagram-friendly equivalent form: left-recursive
operator chains become ``x (op x)*`` loops, ``x (',' x)*`` lists become
repetitions with a separator, and lookaheads survive only as annotations.

Conventions:
  - T("NAME")   token or punctuation; plain strings inside combinators mean the same
  - K("if")     keyword ('if' in the PEG source)
  - SK("match") soft keyword ("match" in the PEG source)
  - NT("block") reference to another rule
"""

from __future__ import annotations

from syntax_diagrams.model.nodes import (
    NT,
    SK,
    Choice,
    K,
    T,
    choice,
    note,
    one_or_more,
    opt,
    seq,
    zero_or_more,
)
from syntax_diagrams.model.registry import RuleProducer, RuleRegistry

START_RULES = ["file", "interactive", "eval", "func_type"]


def _comma_end(lookahead: str) -> Choice:
    """`','` or a lookahead on ``lookahead``, the tail shared by parameter rules."""
    return choice(",", note(f"&'{lookahead}'"))


def _param_tail() -> Choice:
    return choice(seq(",", opt(T("TYPE_COMMENT"))), seq(opt(T("TYPE_COMMENT")), note("&')'")))


_RULES: list[tuple[str, RuleProducer]] = [
    # ─── Starting rules ──────────────────────────────────────────────────────
    ("file", lambda: seq(opt(NT("statements")), T("ENDMARKER"))),
    ("interactive", lambda: NT("statement_newline")),
    ("eval", lambda: seq(NT("expressions"), zero_or_more(T("NEWLINE")), T("ENDMARKER"))),
    (
        "func_type",
        lambda: seq(
            "(", opt(NT("type_expressions")), ")", "->", NT("expression"), zero_or_more(T("NEWLINE")), T("ENDMARKER")
        ),
    ),
    # ─── General statements ──────────────────────────────────────────────────
    ("statements", lambda: one_or_more(NT("statement"))),
    ("statement", lambda: choice(NT("compound_stmt"), NT("simple_stmts"))),
    (
        "statement_newline",
        lambda: choice(seq(NT("compound_stmt"), T("NEWLINE")), NT("simple_stmts"), T("NEWLINE"), T("ENDMARKER")),
    ),
    (
        "simple_stmts",
        lambda: choice(
            seq(NT("simple_stmt"), T("NEWLINE")),
            seq(one_or_more(NT("simple_stmt"), ";"), opt(";"), T("NEWLINE")),
        ),
    ),
    (
        "simple_stmt",
        lambda: choice(
            NT("assignment"),
            NT("type_alias"),
            NT("star_expressions"),
            NT("return_stmt"),
            NT("import_stmt"),
            NT("raise_stmt"),
            NT("pass_stmt"),
            NT("del_stmt"),
            NT("yield_stmt"),
            NT("assert_stmt"),
            NT("break_stmt"),
            NT("continue_stmt"),
            NT("global_stmt"),
            NT("nonlocal_stmt"),
        ),
    ),
    (
        "compound_stmt",
        lambda: choice(
            NT("function_def"),
            NT("if_stmt"),
            NT("class_def"),
            NT("with_stmt"),
            NT("for_stmt"),
            NT("try_stmt"),
            NT("while_stmt"),
            NT("match_stmt"),
        ),
    ),
    # ─── Simple statements ───────────────────────────────────────────────────
    (
        "assignment",
        lambda: choice(
            seq(T("NAME"), ":", NT("expression"), opt(seq("=", NT("annotated_rhs")))),
            seq(
                choice(seq("(", NT("single_target"), ")"), NT("single_subscript_attribute_target")),
                ":",
                NT("expression"),
                opt(seq("=", NT("annotated_rhs"))),
            ),
            seq(one_or_more(seq(NT("star_targets"), "=")), NT("annotated_rhs"), opt(T("TYPE_COMMENT"))),
            seq(NT("single_target"), NT("augassign"), NT("annotated_rhs")),
        ),
    ),
    ("annotated_rhs", lambda: choice(NT("yield_expr"), NT("star_expressions"))),
    (
        "augassign",
        lambda: choice("+=", "-=", "*=", "@=", "/=", "%=", "&=", "|=", "^=", "<<=", ">>=", "**=", "//="),
    ),
    ("return_stmt", lambda: seq(K("return"), opt(NT("star_expressions")))),
    (
        "raise_stmt",
        lambda: choice(seq(K("raise"), NT("expression"), opt(seq(K("from"), NT("expression")))), K("raise")),
    ),
    ("pass_stmt", lambda: K("pass")),
    ("break_stmt", lambda: K("break")),
    ("continue_stmt", lambda: K("continue")),
    ("global_stmt", lambda: seq(K("global"), one_or_more(T("NAME"), ","))),
    ("nonlocal_stmt", lambda: seq(K("nonlocal"), one_or_more(T("NAME"), ","))),
    ("del_stmt", lambda: seq(K("del"), NT("del_targets"))),
    ("yield_stmt", lambda: NT("yield_expr")),
    ("assert_stmt", lambda: seq(K("assert"), NT("expression"), opt(seq(",", NT("expression"))))),
    # ─── Import statements ───────────────────────────────────────────────────
    ("import_stmt", lambda: choice(NT("import_name"), NT("import_from"))),
    ("import_name", lambda: seq(K("import"), NT("dotted_as_names"))),
    (
        "import_from",
        lambda: choice(
            seq(K("from"), zero_or_more(choice(".", "...")), NT("dotted_name"), K("import"), NT("import_from_targets")),
            seq(K("from"), one_or_more(choice(".", "...")), K("import"), NT("import_from_targets")),
        ),
    ),
    (
        "import_from_targets",
        lambda: choice(seq("(", NT("import_from_as_names"), opt(","), ")"), NT("import_from_as_names"), "*"),
    ),
    ("import_from_as_names", lambda: one_or_more(NT("import_from_as_name"), ",")),
    ("import_from_as_name", lambda: seq(T("NAME"), opt(seq(K("as"), T("NAME"))))),
    ("dotted_as_names", lambda: one_or_more(NT("dotted_as_name"), ",")),
    ("dotted_as_name", lambda: seq(NT("dotted_name"), opt(seq(K("as"), T("NAME"))))),
    ("dotted_name", lambda: one_or_more(T("NAME"), ".")),
    # ─── Compound statements: common elements ────────────────────────────────
    (
        "block",
        lambda: choice(seq(T("NEWLINE"), T("INDENT"), NT("statements"), T("DEDENT")), NT("simple_stmts")),
    ),
    ("decorators", lambda: one_or_more(seq("@", NT("named_expression"), T("NEWLINE")))),
    # ─── Class definitions ───────────────────────────────────────────────────
    ("class_def", lambda: choice(seq(NT("decorators"), NT("class_def_raw")), NT("class_def_raw"))),
    (
        "class_def_raw",
        lambda: seq(
            K("class"), T("NAME"), opt(NT("type_params")), opt(seq("(", opt(NT("arguments")), ")")), ":", NT("block")
        ),
    ),
    # ─── Function definitions ────────────────────────────────────────────────
    ("function_def", lambda: choice(seq(NT("decorators"), NT("function_def_raw")), NT("function_def_raw"))),
    (
        "function_def_raw",
        lambda: choice(
            seq(
                K("def"),
                T("NAME"),
                opt(NT("type_params")),
                "(",
                opt(NT("params")),
                ")",
                opt(seq("->", NT("expression"))),
                ":",
                opt(NT("func_type_comment")),
                NT("block"),
            ),
            seq(
                K("async"),
                K("def"),
                T("NAME"),
                opt(NT("type_params")),
                "(",
                opt(NT("params")),
                ")",
                opt(seq("->", NT("expression"))),
                ":",
                opt(NT("func_type_comment")),
                NT("block"),
            ),
        ),
    ),
    # ─── Function parameters ─────────────────────────────────────────────────
    ("params", lambda: NT("parameters")),
    (
        "parameters",
        lambda: choice(
            seq(
                NT("slash_no_default"),
                zero_or_more(NT("param_no_default")),
                zero_or_more(NT("param_with_default")),
                opt(NT("star_etc")),
            ),
            seq(NT("slash_with_default"), zero_or_more(NT("param_with_default")), opt(NT("star_etc"))),
            seq(one_or_more(NT("param_no_default")), zero_or_more(NT("param_with_default")), opt(NT("star_etc"))),
            seq(one_or_more(NT("param_with_default")), opt(NT("star_etc"))),
            NT("star_etc"),
        ),
    ),
    ("slash_no_default", lambda: seq(one_or_more(NT("param_no_default")), "/", _comma_end(")"))),
    (
        "slash_with_default",
        lambda: seq(
            zero_or_more(NT("param_no_default")), one_or_more(NT("param_with_default")), "/", _comma_end(")")
        ),
    ),
    (
        "star_etc",
        lambda: choice(
            seq("*", NT("param_no_default"), zero_or_more(NT("param_maybe_default")), opt(NT("kwds"))),
            seq(
                "*",
                NT("param_no_default_star_annotation"),
                zero_or_more(NT("param_maybe_default")),
                opt(NT("kwds")),
            ),
            seq("*", ",", one_or_more(NT("param_maybe_default")), opt(NT("kwds"))),
            NT("kwds"),
        ),
    ),
    ("kwds", lambda: seq("**", NT("param_no_default"))),
    ("param_no_default", lambda: seq(NT("param"), _param_tail())),
    ("param_no_default_star_annotation", lambda: seq(NT("param_star_annotation"), _param_tail())),
    ("param_with_default", lambda: seq(NT("param"), NT("default"), _param_tail())),
    ("param_maybe_default", lambda: seq(NT("param"), opt(NT("default")), _param_tail())),
    ("param", lambda: seq(T("NAME"), opt(NT("annotation")))),
    ("param_star_annotation", lambda: seq(T("NAME"), NT("star_annotation"))),
    ("annotation", lambda: seq(":", NT("expression"))),
    ("star_annotation", lambda: seq(":", NT("star_expression"))),
    ("default", lambda: seq("=", NT("expression"))),
    # ─── If statement ────────────────────────────────────────────────────────
    (
        "if_stmt",
        lambda: choice(
            seq(K("if"), NT("named_expression"), ":", NT("block"), NT("elif_stmt")),
            seq(K("if"), NT("named_expression"), ":", NT("block"), opt(NT("else_block"))),
        ),
    ),
    (
        "elif_stmt",
        lambda: choice(
            seq(K("elif"), NT("named_expression"), ":", NT("block"), NT("elif_stmt")),
            seq(K("elif"), NT("named_expression"), ":", NT("block"), opt(NT("else_block"))),
        ),
    ),
    ("else_block", lambda: seq(K("else"), ":", NT("block"))),
    # ─── While / for / with ──────────────────────────────────────────────────
    ("while_stmt", lambda: seq(K("while"), NT("named_expression"), ":", NT("block"), opt(NT("else_block")))),
    (
        "for_stmt",
        lambda: choice(
            seq(
                K("for"),
                NT("star_targets"),
                K("in"),
                NT("star_expressions"),
                ":",
                opt(T("TYPE_COMMENT")),
                NT("block"),
                opt(NT("else_block")),
            ),
            seq(
                K("async"),
                K("for"),
                NT("star_targets"),
                K("in"),
                NT("star_expressions"),
                ":",
                opt(T("TYPE_COMMENT")),
                NT("block"),
                opt(NT("else_block")),
            ),
        ),
    ),
    (
        "with_stmt",
        lambda: choice(
            seq(
                K("with"),
                "(",
                one_or_more(NT("with_item"), ","),
                opt(","),
                ")",
                ":",
                opt(T("TYPE_COMMENT")),
                NT("block"),
            ),
            seq(K("with"), one_or_more(NT("with_item"), ","), ":", opt(T("TYPE_COMMENT")), NT("block")),
            seq(K("async"), K("with"), "(", one_or_more(NT("with_item"), ","), opt(","), ")", ":", NT("block")),
            seq(
                K("async"),
                K("with"),
                one_or_more(NT("with_item"), ","),
                ":",
                opt(T("TYPE_COMMENT")),
                NT("block"),
            ),
        ),
    ),
    ("with_item", lambda: choice(seq(NT("expression"), K("as"), NT("star_target")), NT("expression"))),
    # ─── Try statement ───────────────────────────────────────────────────────
    (
        "try_stmt",
        lambda: choice(
            seq(K("try"), ":", NT("block"), NT("finally_block")),
            seq(
                K("try"),
                ":",
                NT("block"),
                one_or_more(NT("except_block")),
                opt(NT("else_block")),
                opt(NT("finally_block")),
            ),
            seq(
                K("try"),
                ":",
                NT("block"),
                one_or_more(NT("except_star_block")),
                opt(NT("else_block")),
                opt(NT("finally_block")),
            ),
        ),
    ),
    (
        "except_block",
        lambda: choice(
            seq(K("except"), NT("expression"), ":", NT("block")),
            seq(K("except"), NT("expression"), K("as"), T("NAME"), ":", NT("block")),
            seq(K("except"), NT("expressions"), ":", NT("block")),
            seq(K("except"), ":", NT("block")),
        ),
    ),
    (
        "except_star_block",
        lambda: choice(
            seq(K("except"), "*", NT("expression"), ":", NT("block")),
            seq(K("except"), "*", NT("expression"), K("as"), T("NAME"), ":", NT("block")),
            seq(K("except"), "*", NT("expressions"), ":", NT("block")),
        ),
    ),
    ("finally_block", lambda: seq(K("finally"), ":", NT("block"))),
    # ─── Match statement ─────────────────────────────────────────────────────
    (
        "match_stmt",
        lambda: seq(
            SK("match"),
            NT("subject_expr"),
            ":",
            T("NEWLINE"),
            T("INDENT"),
            one_or_more(NT("case_block")),
            T("DEDENT"),
        ),
    ),
    (
        "subject_expr",
        lambda: choice(
            seq(NT("star_named_expression"), ",", opt(NT("star_named_expressions"))), NT("named_expression")
        ),
    ),
    ("case_block", lambda: seq(SK("case"), NT("patterns"), opt(NT("guard")), ":", NT("block"))),
    ("guard", lambda: seq(K("if"), NT("named_expression"))),
    ("patterns", lambda: choice(NT("open_sequence_pattern"), NT("pattern"))),
    ("pattern", lambda: choice(NT("as_pattern"), NT("or_pattern"))),
    ("as_pattern", lambda: seq(NT("or_pattern"), K("as"), NT("pattern_capture_target"))),
    ("or_pattern", lambda: one_or_more(NT("closed_pattern"), "|")),
    (
        "closed_pattern",
        lambda: choice(
            NT("literal_pattern"),
            NT("capture_pattern"),
            NT("wildcard_pattern"),
            NT("value_pattern"),
            NT("group_pattern"),
            NT("sequence_pattern"),
            NT("mapping_pattern"),
            NT("class_pattern"),
        ),
    ),
    (
        "literal_pattern",
        lambda: choice(NT("signed_number"), NT("complex_number"), NT("strings"), K("None"), K("True"), K("False")),
    ),
    (
        "literal_expr",
        lambda: choice(NT("signed_number"), NT("complex_number"), NT("strings"), K("None"), K("True"), K("False")),
    ),
    (
        "complex_number",
        lambda: choice(
            seq(NT("signed_real_number"), "+", NT("imaginary_number")),
            seq(NT("signed_real_number"), "-", NT("imaginary_number")),
        ),
    ),
    ("signed_number", lambda: choice(T("NUMBER"), seq("-", T("NUMBER")))),
    ("signed_real_number", lambda: choice(NT("real_number"), seq("-", NT("real_number")))),
    ("real_number", lambda: T("NUMBER")),
    ("imaginary_number", lambda: T("NUMBER")),
    ("capture_pattern", lambda: NT("pattern_capture_target")),
    ("pattern_capture_target", lambda: seq(T("NAME"), note("not '_', not followed by '.', '(', or '='"))),
    ("wildcard_pattern", lambda: T("_")),
    ("value_pattern", lambda: NT("attr")),
    ("attr", lambda: seq(NT("name_or_attr"), ".", T("NAME"))),
    ("name_or_attr", lambda: choice(NT("attr"), T("NAME"))),
    ("group_pattern", lambda: seq("(", NT("pattern"), ")")),
    (
        "sequence_pattern",
        lambda: choice(
            seq("[", opt(NT("maybe_sequence_pattern")), "]"), seq("(", opt(NT("open_sequence_pattern")), ")")
        ),
    ),
    ("open_sequence_pattern", lambda: seq(NT("maybe_star_pattern"), ",", opt(NT("maybe_sequence_pattern")))),
    ("maybe_sequence_pattern", lambda: seq(one_or_more(NT("maybe_star_pattern"), ","), opt(","))),
    ("maybe_star_pattern", lambda: choice(NT("star_pattern"), NT("pattern"))),
    (
        "star_pattern",
        lambda: choice(seq("*", NT("pattern_capture_target")), seq("*", NT("wildcard_pattern"))),
    ),
    (
        "mapping_pattern",
        lambda: choice(
            seq("{", "}"),
            seq("{", NT("double_star_pattern"), opt(","), "}"),
            seq("{", NT("items_pattern"), ",", NT("double_star_pattern"), opt(","), "}"),
            seq("{", NT("items_pattern"), opt(","), "}"),
        ),
    ),
    ("items_pattern", lambda: one_or_more(NT("key_value_pattern"), ",")),
    ("key_value_pattern", lambda: seq(choice(NT("literal_expr"), NT("attr")), ":", NT("pattern"))),
    ("double_star_pattern", lambda: seq("**", NT("pattern_capture_target"))),
    (
        "class_pattern",
        lambda: choice(
            seq(NT("name_or_attr"), "(", ")"),
            seq(NT("name_or_attr"), "(", NT("positional_patterns"), opt(","), ")"),
            seq(NT("name_or_attr"), "(", NT("keyword_patterns"), opt(","), ")"),
            seq(NT("name_or_attr"), "(", NT("positional_patterns"), ",", NT("keyword_patterns"), opt(","), ")"),
        ),
    ),
    ("positional_patterns", lambda: one_or_more(NT("pattern"), ",")),
    ("keyword_patterns", lambda: one_or_more(NT("keyword_pattern"), ",")),
    ("keyword_pattern", lambda: seq(T("NAME"), "=", NT("pattern"))),
    # ─── Type statement ──────────────────────────────────────────────────────
    ("type_alias", lambda: seq(SK("type"), T("NAME"), opt(NT("type_params")), "=", NT("expression"))),
    ("type_params", lambda: seq("[", NT("type_param_seq"), "]")),
    ("type_param_seq", lambda: seq(one_or_more(NT("type_param"), ","), opt(","))),
    (
        "type_param",
        lambda: choice(
            seq(T("NAME"), opt(NT("type_param_bound")), opt(NT("type_param_default"))),
            seq("*", T("NAME"), opt(NT("type_param_starred_default"))),
            seq("**", T("NAME"), opt(NT("type_param_default"))),
        ),
    ),
    ("type_param_bound", lambda: seq(":", NT("expression"))),
    ("type_param_default", lambda: seq("=", NT("expression"))),
    ("type_param_starred_default", lambda: seq("=", NT("star_expression"))),
    # ─── Expressions ─────────────────────────────────────────────────────────
    (
        "expressions",
        lambda: choice(
            seq(NT("expression"), one_or_more(seq(",", NT("expression"))), opt(",")),
            seq(NT("expression"), ","),
            NT("expression"),
        ),
    ),
    (
        "expression",
        lambda: choice(
            seq(NT("disjunction"), K("if"), NT("disjunction"), K("else"), NT("expression")),
            NT("disjunction"),
            NT("lambdef"),
        ),
    ),
    (
        "yield_expr",
        lambda: choice(seq(K("yield"), K("from"), NT("expression")), seq(K("yield"), opt(NT("star_expressions")))),
    ),
    (
        "star_expressions",
        lambda: choice(
            seq(NT("star_expression"), one_or_more(seq(",", NT("star_expression"))), opt(",")),
            seq(NT("star_expression"), ","),
            NT("star_expression"),
        ),
    ),
    ("star_expression", lambda: choice(seq("*", NT("bitwise_or")), NT("expression"))),
    ("star_named_expressions", lambda: seq(one_or_more(NT("star_named_expression"), ","), opt(","))),
    ("star_named_expression", lambda: choice(seq("*", NT("bitwise_or")), NT("named_expression"))),
    ("assignment_expression", lambda: seq(T("NAME"), ":=", NT("expression"))),
    ("named_expression", lambda: choice(NT("assignment_expression"), NT("expression"))),
    (
        "disjunction",
        lambda: choice(seq(NT("conjunction"), one_or_more(seq(K("or"), NT("conjunction")))), NT("conjunction")),
    ),
    (
        "conjunction",
        lambda: choice(seq(NT("inversion"), one_or_more(seq(K("and"), NT("inversion")))), NT("inversion")),
    ),
    ("inversion", lambda: choice(seq(K("not"), NT("inversion")), NT("comparison"))),
    # ─── Comparison operators ────────────────────────────────────────────────
    (
        "comparison",
        lambda: choice(seq(NT("bitwise_or"), one_or_more(NT("compare_op_bitwise_or_pair"))), NT("bitwise_or")),
    ),
    (
        "compare_op_bitwise_or_pair",
        lambda: choice(
            NT("eq_bitwise_or"),
            NT("noteq_bitwise_or"),
            NT("lte_bitwise_or"),
            NT("lt_bitwise_or"),
            NT("gte_bitwise_or"),
            NT("gt_bitwise_or"),
            NT("notin_bitwise_or"),
            NT("in_bitwise_or"),
            NT("isnot_bitwise_or"),
            NT("is_bitwise_or"),
        ),
    ),
    ("eq_bitwise_or", lambda: seq("==", NT("bitwise_or"))),
    ("noteq_bitwise_or", lambda: seq("!=", NT("bitwise_or"))),
    ("lte_bitwise_or", lambda: seq("<=", NT("bitwise_or"))),
    ("lt_bitwise_or", lambda: seq("<", NT("bitwise_or"))),
    ("gte_bitwise_or", lambda: seq(">=", NT("bitwise_or"))),
    ("gt_bitwise_or", lambda: seq(">", NT("bitwise_or"))),
    ("notin_bitwise_or", lambda: seq(K("not"), K("in"), NT("bitwise_or"))),
    ("in_bitwise_or", lambda: seq(K("in"), NT("bitwise_or"))),
    ("isnot_bitwise_or", lambda: seq(K("is"), K("not"), NT("bitwise_or"))),
    ("is_bitwise_or", lambda: seq(K("is"), NT("bitwise_or"))),
    # ─── Bitwise operators ───────────────────────────────────────────────────
    ("bitwise_or", lambda: one_or_more(NT("bitwise_xor"), "|")),
    ("bitwise_xor", lambda: one_or_more(NT("bitwise_and"), "^")),
    ("bitwise_and", lambda: one_or_more(NT("shift_expr"), "&")),
    ("shift_expr", lambda: one_or_more(NT("sum"), choice("<<", ">>"))),
    # ─── Arithmetic operators ────────────────────────────────────────────────
    ("sum", lambda: one_or_more(NT("term"), choice("+", "-"))),
    ("term", lambda: one_or_more(NT("factor"), choice("*", "/", "//", "%", "@"))),
    (
        "factor",
        lambda: choice(seq("+", NT("factor")), seq("-", NT("factor")), seq("~", NT("factor")), NT("power")),
    ),
    ("power", lambda: choice(seq(NT("await_primary"), "**", NT("factor")), NT("await_primary"))),
    # ─── Primary elements ────────────────────────────────────────────────────
    ("await_primary", lambda: choice(seq(K("await"), NT("primary")), NT("primary"))),
    (
        "primary",
        lambda: seq(
            NT("atom"),
            zero_or_more(
                choice(
                    seq(".", T("NAME")),
                    NT("genexp"),
                    seq("(", opt(NT("arguments")), ")"),
                    seq("[", NT("slices"), "]"),
                )
            ),
        ),
    ),
    (
        "slices",
        lambda: choice(
            NT("slice"),
            seq(one_or_more(choice(NT("slice"), NT("starred_expression")), ","), opt(",")),
        ),
    ),
    (
        "slice",
        lambda: choice(
            seq(opt(NT("expression")), ":", opt(NT("expression")), opt(seq(":", opt(NT("expression"))))),
            NT("named_expression"),
        ),
    ),
    (
        "atom",
        lambda: choice(
            T("NAME"),
            K("True"),
            K("False"),
            K("None"),
            NT("strings"),
            T("NUMBER"),
            choice(NT("tuple"), NT("group"), NT("genexp")),
            choice(NT("list"), NT("listcomp")),
            choice(NT("dict"), NT("set"), NT("dictcomp"), NT("setcomp")),
            "...",
        ),
    ),
    ("group", lambda: seq("(", choice(NT("yield_expr"), NT("named_expression")), ")")),
    # ─── Lambda functions ────────────────────────────────────────────────────
    ("lambdef", lambda: seq(K("lambda"), opt(NT("lambda_params")), ":", NT("expression"))),
    ("lambda_params", lambda: NT("lambda_parameters")),
    (
        "lambda_parameters",
        lambda: choice(
            seq(
                NT("lambda_slash_no_default"),
                zero_or_more(NT("lambda_param_no_default")),
                zero_or_more(NT("lambda_param_with_default")),
                opt(NT("lambda_star_etc")),
            ),
            seq(
                NT("lambda_slash_with_default"),
                zero_or_more(NT("lambda_param_with_default")),
                opt(NT("lambda_star_etc")),
            ),
            seq(
                one_or_more(NT("lambda_param_no_default")),
                zero_or_more(NT("lambda_param_with_default")),
                opt(NT("lambda_star_etc")),
            ),
            seq(one_or_more(NT("lambda_param_with_default")), opt(NT("lambda_star_etc"))),
            NT("lambda_star_etc"),
        ),
    ),
    ("lambda_slash_no_default", lambda: seq(one_or_more(NT("lambda_param_no_default")), "/", _comma_end(":"))),
    (
        "lambda_slash_with_default",
        lambda: seq(
            zero_or_more(NT("lambda_param_no_default")),
            one_or_more(NT("lambda_param_with_default")),
            "/",
            _comma_end(":"),
        ),
    ),
    (
        "lambda_star_etc",
        lambda: choice(
            seq(
                "*",
                NT("lambda_param_no_default"),
                zero_or_more(NT("lambda_param_maybe_default")),
                opt(NT("lambda_kwds")),
            ),
            seq("*", ",", one_or_more(NT("lambda_param_maybe_default")), opt(NT("lambda_kwds"))),
            NT("lambda_kwds"),
        ),
    ),
    ("lambda_kwds", lambda: seq("**", NT("lambda_param_no_default"))),
    ("lambda_param_no_default", lambda: seq(NT("lambda_param"), _comma_end(":"))),
    ("lambda_param_with_default", lambda: seq(NT("lambda_param"), NT("default"), _comma_end(":"))),
    ("lambda_param_maybe_default", lambda: seq(NT("lambda_param"), opt(NT("default")), _comma_end(":"))),
    ("lambda_param", lambda: T("NAME")),
    # ─── Literals ────────────────────────────────────────────────────────────
    ("fstring_middle", lambda: choice(NT("fstring_replacement_field"), T("FSTRING_MIDDLE"))),
    (
        "fstring_replacement_field",
        lambda: seq(
            "{",
            NT("annotated_rhs"),
            opt("="),
            opt(NT("fstring_conversion")),
            opt(NT("fstring_full_format_spec")),
            "}",
        ),
    ),
    ("fstring_conversion", lambda: seq("!", T("NAME"))),
    ("fstring_full_format_spec", lambda: seq(":", zero_or_more(NT("fstring_format_spec")))),
    ("fstring_format_spec", lambda: choice(T("FSTRING_MIDDLE"), NT("fstring_replacement_field"))),
    ("fstring", lambda: seq(T("FSTRING_START"), zero_or_more(NT("fstring_middle")), T("FSTRING_END"))),
    (
        "tstring_format_spec_replacement_field",
        lambda: seq(
            "{",
            NT("annotated_rhs"),
            opt("="),
            opt(NT("fstring_conversion")),
            opt(NT("tstring_full_format_spec")),
            "}",
        ),
    ),
    (
        "tstring_format_spec",
        lambda: choice(T("TSTRING_MIDDLE"), NT("tstring_format_spec_replacement_field")),
    ),
    ("tstring_full_format_spec", lambda: seq(":", zero_or_more(NT("tstring_format_spec")))),
    (
        "tstring_replacement_field",
        lambda: seq(
            "{",
            NT("annotated_rhs"),
            opt("="),
            opt(NT("fstring_conversion")),
            opt(NT("tstring_full_format_spec")),
            "}",
        ),
    ),
    ("tstring_middle", lambda: choice(NT("tstring_replacement_field"), T("TSTRING_MIDDLE"))),
    ("tstring", lambda: seq(T("TSTRING_START"), zero_or_more(NT("tstring_middle")), T("TSTRING_END"))),
    ("string", lambda: T("STRING")),
    (
        "strings",
        lambda: choice(one_or_more(choice(NT("fstring"), NT("string"))), one_or_more(NT("tstring"))),
    ),
    # ─── Collections ─────────────────────────────────────────────────────────
    ("list", lambda: seq("[", opt(NT("star_named_expressions")), "]")),
    (
        "tuple",
        lambda: seq(
            "(", opt(seq(NT("star_named_expression"), ",", opt(NT("star_named_expressions")))), ")"
        ),
    ),
    ("set", lambda: seq("{", NT("star_named_expressions"), "}")),
    ("dict", lambda: seq("{", opt(NT("double_starred_kvpairs")), "}")),
    ("double_starred_kvpairs", lambda: seq(one_or_more(NT("double_starred_kvpair"), ","), opt(","))),
    ("double_starred_kvpair", lambda: choice(seq("**", NT("bitwise_or")), NT("kvpair"))),
    ("kvpair", lambda: seq(NT("expression"), ":", NT("expression"))),
    # ─── Comprehensions & generators ─────────────────────────────────────────
    ("for_if_clauses", lambda: one_or_more(NT("for_if_clause"))),
    (
        "for_if_clause",
        lambda: choice(
            seq(
                K("async"),
                K("for"),
                NT("star_targets"),
                K("in"),
                NT("disjunction"),
                zero_or_more(seq(K("if"), NT("disjunction"))),
            ),
            seq(
                K("for"),
                NT("star_targets"),
                K("in"),
                NT("disjunction"),
                zero_or_more(seq(K("if"), NT("disjunction"))),
            ),
        ),
    ),
    ("listcomp", lambda: seq("[", NT("named_expression"), NT("for_if_clauses"), "]")),
    ("setcomp", lambda: seq("{", NT("named_expression"), NT("for_if_clauses"), "}")),
    (
        "genexp",
        lambda: seq("(", choice(NT("assignment_expression"), NT("expression")), NT("for_if_clauses"), ")"),
    ),
    ("dictcomp", lambda: seq("{", NT("kvpair"), NT("for_if_clauses"), "}")),
    # ─── Function call arguments ─────────────────────────────────────────────
    ("arguments", lambda: seq(NT("args"), opt(","))),
    (
        "args",
        lambda: choice(
            seq(
                one_or_more(choice(NT("starred_expression"), NT("assignment_expression"), NT("expression")), ","),
                opt(seq(",", NT("kwargs"))),
            ),
            NT("kwargs"),
        ),
    ),
    (
        "kwargs",
        lambda: choice(
            seq(
                one_or_more(NT("kwarg_or_starred"), ","),
                ",",
                one_or_more(NT("kwarg_or_double_starred"), ","),
            ),
            one_or_more(NT("kwarg_or_starred"), ","),
            one_or_more(NT("kwarg_or_double_starred"), ","),
        ),
    ),
    ("starred_expression", lambda: seq("*", NT("expression"))),
    ("kwarg_or_starred", lambda: choice(seq(T("NAME"), "=", NT("expression")), NT("starred_expression"))),
    (
        "kwarg_or_double_starred",
        lambda: choice(seq(T("NAME"), "=", NT("expression")), seq("**", NT("expression"))),
    ),
    # ─── Assignment targets ──────────────────────────────────────────────────
    (
        "star_targets",
        lambda: choice(NT("star_target"), seq(one_or_more(NT("star_target"), ","), opt(","))),
    ),
    ("star_targets_list_seq", lambda: seq(one_or_more(NT("star_target"), ","), opt(","))),
    (
        "star_targets_tuple_seq",
        lambda: choice(
            seq(NT("star_target"), one_or_more(seq(",", NT("star_target"))), opt(",")),
            seq(NT("star_target"), ","),
        ),
    ),
    ("star_target", lambda: choice(seq("*", NT("star_target")), NT("target_with_star_atom"))),
    (
        "target_with_star_atom",
        lambda: choice(
            seq(NT("t_primary"), ".", T("NAME")),
            seq(NT("t_primary"), "[", NT("slices"), "]"),
            NT("star_atom"),
        ),
    ),
    (
        "star_atom",
        lambda: choice(
            T("NAME"),
            seq("(", NT("target_with_star_atom"), ")"),
            seq("(", opt(NT("star_targets_tuple_seq")), ")"),
            seq("[", opt(NT("star_targets_list_seq")), "]"),
        ),
    ),
    (
        "single_target",
        lambda: choice(NT("single_subscript_attribute_target"), T("NAME"), seq("(", NT("single_target"), ")")),
    ),
    (
        "single_subscript_attribute_target",
        lambda: choice(seq(NT("t_primary"), ".", T("NAME")), seq(NT("t_primary"), "[", NT("slices"), "]")),
    ),
    (
        "t_primary",
        lambda: seq(
            NT("atom"),
            zero_or_more(
                choice(
                    seq(".", T("NAME")),
                    seq("[", NT("slices"), "]"),
                    NT("genexp"),
                    seq("(", opt(NT("arguments")), ")"),
                )
            ),
            note("&t_lookahead"),
        ),
    ),
    ("t_lookahead", lambda: choice("(", "[", ".")),
    # ─── Del targets ─────────────────────────────────────────────────────────
    ("del_targets", lambda: seq(one_or_more(NT("del_target"), ","), opt(","))),
    (
        "del_target",
        lambda: choice(
            seq(NT("t_primary"), ".", T("NAME")),
            seq(NT("t_primary"), "[", NT("slices"), "]"),
            NT("del_t_atom"),
        ),
    ),
    (
        "del_t_atom",
        lambda: choice(
            T("NAME"),
            seq("(", NT("del_target"), ")"),
            seq("(", opt(NT("del_targets")), ")"),
            seq("[", opt(NT("del_targets")), "]"),
        ),
    ),
    # ─── Typing elements ─────────────────────────────────────────────────────
    (
        "type_expressions",
        lambda: choice(
            seq(one_or_more(NT("expression"), ","), ",", "*", NT("expression"), ",", "**", NT("expression")),
            seq(one_or_more(NT("expression"), ","), ",", "*", NT("expression")),
            seq(one_or_more(NT("expression"), ","), ",", "**", NT("expression")),
            seq("*", NT("expression"), ",", "**", NT("expression")),
            seq("*", NT("expression")),
            seq("**", NT("expression")),
            one_or_more(NT("expression"), ","),
        ),
    ),
    ("func_type_comment", lambda: choice(seq(T("NEWLINE"), T("TYPE_COMMENT")), T("TYPE_COMMENT"))),
]


def rule_names() -> list[str]:
    """Names of every transcribed rule, in definition order."""
    return [name for name, _ in _RULES]


def init(registry: RuleRegistry) -> RuleRegistry:
    """Register every Python grammar rule into ``registry`` and return it."""
    for name, producer in _RULES:
        registry.register(name, producer)
    return registry


def default_registry() -> RuleRegistry:
    """A fresh registry holding the Python grammar."""
    return init(RuleRegistry())
