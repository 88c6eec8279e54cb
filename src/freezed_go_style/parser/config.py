# Mapping of file extensions to language names used in this module
SUPPORTED_LANGUAGES = {
    ".dart": "dart",
}

# Node types of the tree-sitter Dart grammar the formatter relies on.
# Tuples so that grammar revisions that renamed a node keep working.
DART_NODE_TYPES = {
    "class": ("class_definition", "class_declaration"),
    "class_body": ("class_body",),
    "parameter_list": ("formal_parameter_list",),
    "optional_parameters": ("optional_formal_parameters",),
    "identifier": ("identifier",),
    "error": ("ERROR",),
}

# Suffix matching covers annotation/marker_annotation and
# comment/documentation_comment/block_comment.
ANNOTATION_SUFFIX = "annotation"
COMMENT_SUFFIX = "comment"
