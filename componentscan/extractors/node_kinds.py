FUNCTION_DECLARATIONS = frozenset({"function_declaration", "generator_function_declaration"})
CLASS_DECLARATIONS = frozenset({"class_declaration", "abstract_class_declaration"})
VARIABLE_DECLARATIONS = frozenset({"lexical_declaration", "variable_declaration"})

# "function" is the pre-0.21 JavaScript grammar name for function_expression
FUNCTION_EXPRESSIONS = frozenset({"function_expression", "function", "generator_function", "arrow_function"})
CLASS_EXPRESSIONS = frozenset({"class"})

FUNCTION_LIKE = FUNCTION_DECLARATIONS | FUNCTION_EXPRESSIONS
CLASS_LIKE = CLASS_DECLARATIONS | CLASS_EXPRESSIONS

CLASS_FIELDS = frozenset({"field_definition", "public_field_definition"})
