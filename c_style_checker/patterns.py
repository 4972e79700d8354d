"""
Regular expressions shared by the trackers and line rules.

All patterns are compiled once at import time and are read-only afterwards.
Patterns applied to "code" text expect comment-free, literal-masked lines
whose columns match the raw source line.
"""

import re

IDENT = r"[A-Za-z_][A-Za-z0-9_]*"
TYPE_WORDS = r"(?:void|char|short|int|long|float|double|signed|unsigned|bool|_Bool)"
TYPEDEF_NAME = r"[A-Za-z_][A-Za-z0-9_]*_t"
TAGGED_TYPE = r"(?:struct|union|enum)\s+" + IDENT
KNOWN_TYPE = r"(?:" + TYPE_WORDS + r"|" + TYPEDEF_NAME + r"|" + TAGGED_TYPE + r")"

C_KEYWORDS = frozenset({
    "auto", "break", "case", "char", "const", "continue", "default", "do",
    "double", "else", "enum", "extern", "float", "for", "goto", "if", "inline",
    "int", "long", "register", "restrict", "return", "short", "signed",
    "sizeof", "static", "struct", "switch", "typedef", "union", "unsigned",
    "void", "volatile", "while", "_Alignas", "_Alignof", "_Atomic", "_Bool",
    "_Complex", "_Generic", "_Imaginary", "_Noreturn", "_Static_assert",
    "_Thread_local", "bool",
})

# Words that start a statement rather than a declaration.
STATEMENT_KEYWORDS = frozenset({
    "break", "case", "continue", "default", "do", "else", "for", "goto", "if",
    "return", "sizeof", "switch", "typedef", "while",
})

UNSAFE_FUNCTIONS = {
    "gets": "fgets(buffer, size, stdin)",
    "strcpy": "strlcpy(dest, src, dest_size) // or strncpy(dest, src, n)",
    "strcat": "strlcat(dest, src, dest_size) // or strncat(dest, src, n)",
    "sprintf": "snprintf(buffer, size, ...)",
    "vsprintf": "vsnprintf(buffer, size, ap)",
    "scanf": "fgets(line, size, stdin) and then sscanf(line, \"%…\", &…)",
    "fscanf": "fgets(line, size, file) and then sscanf(line, \"%…\", &…)",
    "sscanf": "sscanf(line, \"%width…\", &…) // use width specifiers",
    "tmpnam": "mkstemp(template) // or tmpfile()",
    "getwd": "getcwd(buffer, size)",
}

# naming conventions
SNAKE = re.compile(r"^[a-z][a-z0-9_]*$")
SNAKE_TYPEDEF = re.compile(r"^[a-z][a-z0-9_]*_t$")
SCREAMING_SNAKE = re.compile(r"^[A-Z][A-Z0-9_]*$")
CAMEL = re.compile(r"^[a-z][A-Za-z0-9]*$")
MODULE_CAMEL = re.compile(r"^[A-Za-z][A-Za-z0-9]*_[a-z][A-Za-z0-9]*$")

# comments
TODO = re.compile(r"\b(?:TODO|FIXME)\b")
FALL_THROUGH_MARKER = "fall-through"

# whitespace and spacing
TRAILING_WHITESPACE = re.compile(r"[ \t]+$")
SEMICOLON_SPACE = re.compile(r"(?<=\S)[ \t]+;")
BAD_PAREN_SPACE = re.compile(r"\([ \t]+|(?<=\S)[ \t]+\)")
BAD_BRACKET_SPACE = re.compile(r"\[[ \t]+|(?<=\S)[ \t]+\]")
BAD_COMMA = re.compile(r"[ \t]+,|,(?=[^\s])|, {2,}(?=\S)")
MULTI_SPACE = re.compile(r"(?<=\S)( {2,})(?=\S)")
KEYWORD_NO_SPACE = re.compile(
    r"\b(if|else|for|while|return|switch|case|do|typedef|struct|union|enum|"
    r"static|const|extern|unsigned|signed)\(")
IDENT_SPACE_PAREN = re.compile(r"(" + IDENT + r")[ \t]+\(")
OPERATOR = re.compile(
    r"<<=|>>=|->|\+\+|--|&&|\|\||<<|>>|>=|<=|==|!=|\+=|-=|\*=|/=|%=|&=|\|=|\^="
    r"|[=+\-*/%<>?:]")
UNARY_KEYWORD_BEFORE = re.compile(r"\b(?:return|case|sizeof)$")
EXPONENT_BEFORE = re.compile(r"(?<![A-Za-z_])\d+(?:\.\d*)?[eE]$")
MAGIC_NUMBER = re.compile(r"(?<![\w.])(\d+)(?![\w.])")

# pointers
POINTER_MARKERS = (
    # type *name / struct tag *name / size_t **name
    re.compile(r"\b" + KNOWN_TYPE + r"\s*\*+\s*(?:const\s+)?(?=[A-Za-z_(])"),
    # first word of a statement followed by *name: user typedefs like "Node *head"
    re.compile(r"^\s*(?:(?:static|const|extern|register|volatile)\s+)*" + IDENT
               + r"\s+\*+(?=[A-Za-z_(])"),
    # parameter position: "(Node *node" or ", Node *node"
    re.compile(r"(?<=[(,])\s*(?:const\s+)?" + IDENT + r"\s+\*+(?=[A-Za-z_])"),
    # casts and unnamed pointer parameters: (char *), (struct node **), Node *,
    re.compile(r"\b" + IDENT + r"\s*\*+\s*(?=[,)])"),
    # instances declared on the closing line of a type: "} *head;"
    re.compile(r"^\s*\}\s*\*+(?=[A-Za-z_])"),
    # function pointers: (*name)
    re.compile(r"\(\s*\*+\s*" + IDENT + r"\s*\)"),
)
POINTER_TYPE_STAR_ATTACHED = re.compile(
    r"\b(?:" + TYPE_WORDS + r"|" + TYPEDEF_NAME + r"|" + TAGGED_TYPE + r")\*")
POINTER_SPACED_DECL = re.compile(r"\b" + KNOWN_TYPE + r"\s+\*+\s+(?=[A-Za-z_])")
POINTER_CAST_DETACHED = re.compile(
    r"\(\s*(?:const\s+)?(?:(?:struct|union|enum)\s+)?" + IDENT
    + r"\s*\*+\s*\)[ \t]+(?=[A-Za-z_(])")

# allocation
ALLOC_CALL = re.compile(r"\b(malloc|calloc|realloc)\s*\(")
CAST_SUFFIX = re.compile(
    r"\(\s*(?:const\s+)?(?:(?:struct|union|enum)\s+)?" + IDENT + r"\s*\*+\s*\)\s*$")
UNSAFE_CALL = re.compile(r"\b(" + "|".join(UNSAFE_FUNCTIONS) + r")\s*\(")

# preprocessor
INCLUDE = re.compile(r"^\s*#\s*include\s*([<\"][^>\"]+[>\"])")
DEFINE = re.compile(r"^\s*#\s*define\s+(" + IDENT + r")")
FUNC_MACRO = re.compile(r"^\s*#\s*define\s+(" + IDENT + r")\(([^)]*)\)(.*)$")
MACRO_NO_SPACE = re.compile(r"^\s*#\s*define\s+" + IDENT + r"\([^)]*\)(?=\S)")
PRAGMA_ONCE = re.compile(r"^\s*#\s*pragma\s+once\s*$")

# statements
LABEL = re.compile(r"^\s*(" + IDENT + r")([ \t]*):\s*$")
CASE_LABEL = re.compile(r"^\s*(case\b.*?|default)([ \t]*):(?!:)(.*)$")
CASE_START = re.compile(r"^(?:case\b|default\s*:)")
BREAK_STMT = re.compile(r"^break\s*;")
CONTROL_START = re.compile(r"^(?:\}\s*)?(?:typedef\s+)?(if|else|for|while|do|switch|struct|union|enum)\b")
BRACE_CONTROL = re.compile(r"^(?:\}\s*)?(if|else|for|while|do|switch)\b")
INLINE_KEYWORD = re.compile(r"^(else\s+if|if|for|while|switch|else|do)\b")
INNER_CONTROL = re.compile(r"\b(?:if|for|while|switch|do)\b")

# functions
FUNC_DECL = re.compile(
    r"^\s*((?:" + IDENT + r"\s+|" + IDENT + r"\s*\*+\s*)+)(" + IDENT
    + r")(\s*)\((.*)\)\s*(;|\{)?\s*$")
FUNC_HEADER = re.compile(
    r"^\s*((?:" + IDENT + r"\s+|" + IDENT + r"\s*\*+\s*)+)(" + IDENT + r")(\s*)\(")
FUNC_NAME_ONLY = re.compile(r"^\s*(" + IDENT + r")\s*\(")
ONLY_TYPE = re.compile(
    r"^(?:(?:static|const|extern|inline|unsigned|signed|short|long)\s+)*"
    r"(?:" + KNOWN_TYPE + r"|" + IDENT + r")(?:\s*\*+)?$")
FUNC_POINTER_NAME = re.compile(r"\(\s*\*+\s*(" + IDENT + r")\s*\)")

# declarations
VAR_DECL = re.compile(
    r"^\s*((?:" + IDENT + r"\s+)+)(?:\*+\s*)?(" + IDENT + r")\s*(?:\[[^\]]*\]\s*)*(?:=|;)")
MULTI_VAR_DECL = re.compile(
    r"^\s*(?:" + IDENT + r"\s+)+(?:\*+\s*)?" + IDENT
    + r"\s*(?:\[[^\]]*\]\s*)*(?:=[^,;(){}]*)?,")
UNINIT_DECL = re.compile(
    r"^\s*(?:(?:static|const|unsigned|signed|volatile|register)\s+)*"
    r"(?:int|char|float|double|long|short|bool|size_t)(?:\s*\*+\s*|\s+)(" + IDENT
    + r")\s*;\s*$")
TYPEDEF_FUNC_PTR = re.compile(r"^\s*typedef\b.*\(\s*\*\s*(" + IDENT + r")\s*\)")
TYPEDEF_ALIAS = re.compile(r"^\s*typedef\b[^(){};]*\b(" + IDENT + r")\s*(?:\[[^\]]*\]\s*)*;")

# type contexts
TYPE_START = re.compile(r"^\s*(typedef\s+)?(struct|enum|union)\b\s*(" + IDENT + r")?\s*$")
TYPE_START_BRACE = re.compile(r"^\s*(typedef\s+)?(struct|enum|union)\b\s*(" + IDENT + r")?\s*\{")
TYPE_CLOSE = re.compile(
    r"^\s*\}\s*(?:\*+\s*)?(" + IDENT + r")?\s*(?:\[[^\]]*\]\s*)*(?:=[^;]*)?;?\s*$")
STRUCT_FIELD = re.compile(
    r"^\s*(?:" + IDENT + r"(?:\s+|\s*\*+\s*))+(" + IDENT
    + r")\s*(?:\[[^\]]*\]\s*)*(?::\s*\w+\s*)?;")
ENUM_ELEMENT = re.compile(r"^\s*(" + IDENT + r")\s*(?:=[^,]*)?,?\s*$")
