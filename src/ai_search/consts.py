"""Static tables shared by the search tools and the answer composer."""

# Site filters appended to the provider query per focus mode
FOCUS_SITE_FILTERS: dict[str, str] = {
    "general": "",
    "academic": "site:edu OR site:ac.uk OR site:ac.za OR site:ac.in",
    "news": "site:news.yahoo.com OR site:reuters.com OR site:bbc.com OR site:cnn.com",
    "technical": "site:stackoverflow.com OR site:github.com OR site:docs.microsoft.com",
}

FOCUS_DESCRIPTIONS: dict[str, str] = {
    "general": "General web search for broad information",
    "academic": "Academic and educational sources",
    "news": "Current news and recent information",
    "technical": "Technical documentation and code examples",
}

DEFAULT_FOCUS_DESCRIPTION = "General information"

# Query words that map to a Stack Overflow tag
PROGRAMMING_KEYWORDS = (
    "javascript",
    "python",
    "java",
    "react",
    "node",
    "vue",
    "angular",
    "typescript",
    "php",
    "ruby",
    "go",
    "rust",
    "c++",
    "c#",
    "swift",
    "kotlin",
    "dart",
    "flutter",
    "docker",
    "kubernetes",
    "aws",
    "azure",
    "database",
    "sql",
    "mongodb",
    "redis",
    "api",
    "rest",
    "graphql",
    "testing",
    "unit",
    "integration",
    "deployment",
    "ci",
    "cd",
)

# Query words that map to an MDN documentation search
WEB_DEVELOPMENT_KEYWORDS = (
    "html",
    "css",
    "javascript",
    "react",
    "vue",
    "angular",
    "node",
    "express",
    "mongodb",
    "sql",
    "api",
    "rest",
    "graphql",
    "webpack",
    "babel",
    "typescript",
    "sass",
    "less",
    "bootstrap",
    "tailwind",
    "responsive",
    "accessibility",
    "seo",
    "performance",
    "security",
)

# Values shipped in example .env files; treated as "no key configured"
PLACEHOLDER_API_KEY = "your-actual-gemini-api-key-here"
PLACEHOLDER_API_KEY_MARKER = "your-"

# Persisted source field limits
MAX_SOURCE_TITLE_LENGTH = 200
MAX_SOURCE_DOMAIN_LENGTH = 100
MAX_SOURCE_SNIPPET_LENGTH = 450

MAX_QUERY_LENGTH = 500
MAX_ANSWER_LENGTH = 10000
MAX_CONVERSATION_ID_LENGTH = 100

# bcrypt only hashes the first 72 bytes and newer releases reject longer input
MAX_PASSWORD_BYTES = 72

DEFAULT_COLLECTION_COLOR = "#3B82F6"
