"""
Constants and configuration values for the response sheet scraper.

This module centralizes the selectors, limits and timeouts shared by the
page fetchers, the extractors and the HTTP service.
"""

# Elements whose visible text is collected as candidate blocks
BLOCK_SELECTORS = [
    'body', 'div', 'section', 'td', 'li', 'aside',
    'article', 'pre', 'table', 'p', 'tr', 'code'
]

# Candidate block collection limits
BLOCK_LIMITS = {
    'max_blocks': 300,
    'short_block_length': 800
}

# Diagnostic payload limits
DIAGNOSTIC_LIMITS = {
    'max_blocks': 60,
    'snippet_length': 15000
}

# Navigation configuration (milliseconds)
TIMEOUTS = {
    'page_load': 60000,
    'settle_delay': 1200
}

# Load-completion conditions, tried in order
WAIT_STATES = ['networkidle', 'domcontentloaded']

LAUNCH_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage'
]

USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
]

VIEWPORT = {'width': 1366, 'height': 768}

ACCEPT_LANGUAGE = 'en-US,en;q=0.9'

# File Paths and Names
DEFAULT_PATHS = {
    'config_file': 'config/settings.json',
    'log_file': 'logs/scraper.log'
}

DEFAULT_SETTINGS = {
    'scraper': {
        'headless': True,
        'user_agents': USER_AGENTS,
        'viewport': VIEWPORT,
        'accept_language': ACCEPT_LANGUAGE,
        'launch_args': LAUNCH_ARGS,
        'concurrency': 3,
        'wait_states': WAIT_STATES,
        'timeouts': TIMEOUTS
    },
    'extraction': {
        'block_selectors': BLOCK_SELECTORS,
        'max_blocks': BLOCK_LIMITS['max_blocks'],
        'short_block_length': BLOCK_LIMITS['short_block_length']
    },
    'diagnostics': {
        'max_blocks': DIAGNOSTIC_LIMITS['max_blocks'],
        'snippet_length': DIAGNOSTIC_LIMITS['snippet_length']
    },
    'server': {
        'host': '0.0.0.0',
        'port': 3000
    },
    'logging': {
        'level': 'INFO',
        'file': DEFAULT_PATHS['log_file'],
        'max_size': 10485760,
        'backup_count': 5
    }
}

# Health check thresholds (percent)
HEALTH_THRESHOLDS = {
    'memory_warning': 80,
    'memory_critical': 90,
    'cpu_warning': 70,
    'cpu_critical': 90
}
