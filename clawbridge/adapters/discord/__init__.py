"""Discord adapter — bot, dispatcher, delivery and proactive poster."""
