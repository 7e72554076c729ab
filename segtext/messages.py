"""Message templates used in the message log.

Each template takes at most two positional arguments ({0} and {1}).
"""

# setup / delimiters
MSG_TAB_SIZE_TOO_LARGE = 'The requested tab size is too large. The maximum value "{0}" will be used.'
MSG_TAB_SIZE_TOO_SMALL = 'The requested tab size is too small. The minimum value "{0}" will be used.'
MSG_TOKEN_START_IS_NULL = "The token start delimiter must not be null."
MSG_TOKEN_END_IS_NULL = "The token end delimiter must not be null."
MSG_TOKEN_ESCAPE_IS_NULL = "The token escape character must not be null."
MSG_TOKEN_START_IS_EMPTY = "The token start delimiter must not be empty or whitespace."
MSG_TOKEN_END_IS_EMPTY = "The token end delimiter must not be empty or whitespace."
MSG_TOKEN_ESCAPE_IS_EMPTY = "The token escape character must not be empty or whitespace."
MSG_TOKEN_START_AND_END_SAME = 'The token start delimiter "{0}" must not be the same as the token end delimiter "{1}".'
MSG_TOKEN_START_AND_ESCAPE_SAME = 'The token start delimiter "{0}" must not be the same as the token escape character "{1}".'
MSG_TOKEN_END_AND_ESCAPE_SAME = 'The token end delimiter "{0}" must not be the same as the token escape character "{1}".'
MSG_TOKEN_START_WARNING = "Ending the token start delimiter with '-', '+' or '=' may cause confusion and lead to unexpected errors."
MSG_INVALID_DELIMITERS = "The token delimiters were rejected. All templates and settings have been reset."

# loading
MSG_LOADING_TEMPLATE = 'Loading template "{0}"'
MSG_TEMPLATE_IS_EMPTY = "This template is empty: {0}"
MSG_TEMPLATE_LOAD_FAILED = 'Unable to load template "{0}". {1}'
MSG_ATTEMPT_TO_LOAD_MORE_THAN_ONCE = 'Attempted to load template file "{0}" more than once. Repeat loads will be ignored.'
MSG_NEXT_LOAD_BEFORE_WRITE = 'Template file "{0}" is being loaded before any output was written for template file "{1}".'
MSG_ERROR_READING_TEMPLATE = "An error occurred while reading the template file. {0}"
MSG_TEMPLATE_FILE_NOT_FOUND = "The template file was not found: {0}"
MSG_TEMPLATE_PATH_IS_EMPTY = "The template file path must not be empty or contain only whitespace."
MSG_DEFAULT_NAME_LIMIT = "Ran out of default segment names. {0}"

# parsing
MSG_MINIMUM_LINE_LENGTH = "All lines in the template must be at least 3 characters long. The line will be ignored."
MSG_FOURTH_CHARACTER_MUST_BE_BLANK = "The fourth character of each template line should be blank:\n{0}\n   ^"
MSG_INVALID_CONTROL_CODE = "The following template line doesn't begin with a valid control code:\n{0}\n^^^"
MSG_FATAL_SYNTAX_ERROR = "Loading stopped at line {0} because of a template syntax error."
MSG_SEGMENT_NAME_MUST_START_IN_COLUMN_5 = 'The segment name must start in column 5 of the segment header line. The default name "{0}" will be used instead.'
MSG_INVALID_SEGMENT_NAME = '"{0}" is not a valid segment name. The default name "{1}" will be used instead.'
MSG_DUPLICATE_SEGMENT_NAME = 'Segment name "{0}" appears more than once in the template. Default name "{1}" will be used in place of the duplicate.'
MSG_SEGMENT_ADDED = 'Segment "{0}" has been added to the control dictionary.'
MSG_NO_TEXT_LINES_FOLLOWING_HEADER = 'The header line for segment "{0}" must be followed by one or more valid text lines. The segment will be ignored.'
MSG_MISSING_INITIAL_HEADER = 'The template is missing the initial segment header. The default segment "{0}" will be used.'
MSG_INVALID_FORM_OF_OPTION = 'Segment options must follow the form "option=value" with no intervening spaces. Found "{1}" on the "{0}" segment header.'
MSG_OPTION_NAME_MUST_PRECEDE_EQUALS = 'An option name must appear immediately before the equals sign with no intervening spaces in the "{0}" segment header.'
MSG_OPTION_VALUE_MUST_FOLLOW_EQUALS = 'The value for option "{1}" must appear immediately after the equals sign with no intervening spaces in the "{0}" segment header.'
MSG_UNKNOWN_SEGMENT_OPTION = 'An unknown segment option "{1}" was found on segment "{0}". It will be ignored.'
MSG_DUPLICATE_OPTION = 'The option "{1}" appears more than once for segment "{0}". Only the first occurrence will be used.'
MSG_FIRST_TIME_INDENT_SET_TO_ZERO = 'Found a First Time Indent option value of zero for segment "{0}". This value disables the First Time Indent processing.'
MSG_INDENT_VALUE_OUT_OF_RANGE = "The FTI option value must be a number between -9 and 9. The value given was {0}."
MSG_INDENT_VALUE_NOT_A_NUMBER = 'The indent value "{0}" is not a valid integer value.'
MSG_TAB_SIZE_OUT_OF_RANGE = 'The tab size must be an integer between 1 and 9, but the specified value was "{0}".'
MSG_TAB_SIZE_NOT_A_NUMBER = 'The tab size value "{0}" is not a valid integer value.'
MSG_INVALID_PAD_SEGMENT_NAME = '"{1}" is not a valid name for the PAD option for segment "{0}". It will be ignored.'
MSG_PAD_SEGMENT_MUST_BE_DEFINED_EARLIER = 'The PAD segment name "{1}" referenced by segment "{0}" must be defined earlier in the template. It will be ignored.'
MSG_PAD_SEGMENT_SAME_AS_HEADER = 'The PAD segment name and segment header name for segment "{0}" are identical. The PAD segment name will be ignored.'
MSG_MULTIPLE_LEVELS_OF_PAD_SEGMENTS = 'Pad segment "{1}" specified for segment "{0}" also contains a pad segment. Multiple levels of pad segments are not allowed.'

# tokens
MSG_MISSING_TOKEN_NAME = "Found token start and end delimiters with no token name between them. The token will be ignored."
MSG_TOKEN_HAS_INVALID_NAME = 'Found a token with an invalid name: "{0}". It will be ignored.'
MSG_TOKEN_MISSING_END_DELIMITER = "Found a token start delimiter with no matching end delimiter. The token will be ignored."
MSG_TOKEN_NAME_NOT_FOUND = 'The token name "{1}" in segment {0} wasn\'t found in the token dictionary. It will be output as is.'
MSG_TOKEN_VALUE_IS_EMPTY = 'Token "{1}" has an empty value while generating segment "{0}".'
MSG_TOKEN_VALUE_IS_NULL = 'Token "{1}" has no assigned value while generating segment "{0}".'
MSG_TOKEN_DICTIONARY_IS_EMPTY = 'An empty token dictionary was supplied for segment "{0}".'
MSG_TOKEN_DICTIONARY_IS_NULL = 'A null token dictionary was supplied for segment "{0}".'
MSG_TOKEN_DICTIONARY_INVALID_NAME = 'The token dictionary contained an invalid token name "{1}" for segment "{0}".'
MSG_UNKNOWN_TOKEN_NAME = 'An unknown token name "{1}" was supplied for segment "{0}". It will be ignored.'

# generating
MSG_PROCESSING_SEGMENT = 'Processing segment "{0}"...'
MSG_LEFT_INDENT_TRUNCATED = 'The calculated line indent for segment "{0}" went negative. It will be set to zero.'
MSG_FIRST_TIME_INDENT_TRUNCATED = 'The calculated first time indent for segment "{0}" went negative. It will be set to zero.'
MSG_SEGMENT_NAME_IS_BLANK = "The segment name passed into generate_segment was null, empty or whitespace."
MSG_GENERATE_BEFORE_LOAD = 'An attempt was made to generate segment "{0}" before the template was loaded.'
MSG_UNKNOWN_SEGMENT_NAME = 'A request was made to generate segment "{0}" but that segment wasn\'t found in the template.'
MSG_SEGMENT_HAS_NO_TEXT_LINES = 'Tried to generate segment "{0}" but the segment has no text lines.'

# writing
MSG_WRITING_TEXT_FILE = 'Writing generated text to file "{0}"'
MSG_GENERATED_TEXT_IS_EMPTY = 'The generated text is empty. Unable to write to output file "{0}".'
MSG_UNABLE_TO_WRITE_FILE = "Unable to write to output file. {0}"

# reset
MSG_TEMPLATE_HAS_BEEN_RESET = 'The environment for template "{0}" has been reset.'
MSG_GENERATED_TEXT_HAS_BEEN_RESET = 'The generated text cache for template "{0}" has been reset.'
MSG_SEGMENT_HAS_BEEN_RESET = 'Segment "{0}" has been reset.'
MSG_UNABLE_TO_RESET_SEGMENT = 'Unable to reset segment "{0}" because of a null or unknown segment name.'
