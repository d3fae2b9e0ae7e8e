"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout - single column
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Chat History Panel
   ============================================ */
#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}

/* ============================================
   Bottom Bar - Status + Input
   ============================================ */
#bottom-bar {
    height: auto;
    padding: 0 1;
    background: $panel;
    border-top: solid $border;
}

#status-bar {
    height: 1;
    padding: 0 1;
    color: $foreground;
}

ChatInputBar {
    height: 5;
    border: round $primary 60%;
    background: $panel;

    &:focus-within {
        border: round $primary;
    }

    &:disabled {
        border: round $border;
        opacity: 60%;
    }
}

#chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    padding: 0 1;
    background: transparent;
}

#send-btn {
    width: 10;
    height: 100%;
    margin: 0 0 0 1;
    text-style: bold;
}

/* ============================================
   Chat Entries
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 0 1;
    background: transparent;
}

.user-message {
    border-left: tall $primary;
    background: $primary 8%;
}

.model-message {
    border-left: tall $secondary;
    background: $secondary 8%;
}

.system-message {
    border-left: tall $border;
    color: $text-muted;
}

.error-message {
    border-left: tall $error;
    background: $error 8%;
}

.message-header {
    height: auto;
}

.message-content {
    height: auto;
    padding: 0;
    margin: 0;
}

Markdown {
    margin: 0;
    padding: 0;
}

MarkdownFence {
    background: $surface;
    margin: 1 0;
}

MarkdownBlockQuote {
    border-left: wide $secondary;
    background: $secondary 8%;
    padding: 0 1;
}

#chat-history.-maximized {
    height: 1fr;
}
"""
