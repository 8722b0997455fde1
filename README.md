# termchat

termchat is a chat client for the terminal. It talks to xAI (Grok),
Anthropic Claude and OpenAI models through a curses interface. Settings are
kept in a JSON file.

## Installation

```
pip install .
```

## Running

```
termchat
termchat --config path/to/settings.json
```

Run it in a terminal that handles UTF-8. By default the settings are read
from `chatbot_config.json` in the current directory. `--config` names another
file. The settings are written back to the same file when the program exits,
either through Ctrl+X or through SIGINT/SIGTERM. If the file is missing or
cannot be read, the program starts with default settings and logs the error.

### Keys

| Key            | Action                                   |
|----------------|------------------------------------------|
| Enter          | Send the current line                    |
| Up / Down      | Scroll the chat one line                 |
| PageUp / Down  | Scroll the chat five lines               |
| Left / Right   | Move the cursor in the input line        |
| Home / End     | Jump to start / end of the input line    |
| Backspace, Del | Delete characters                        |
| F2             | Open the settings panel                  |
| Esc            | Close the settings panel                 |
| Ctrl+X         | Quit                                     |

The input line takes printable ASCII characters only.

The reply to a message appears under `AI:`. A failed request is shown in
place of the reply as `[Error <code>: <message>]`, or as
`[OpenAI Error <code>: <message>]` for OpenAI. The code is the number of a
`termchat.errors.ApiError` member. xAI replies are revealed in pieces of about
40 characters. Claude and OpenAI replies appear all at once.

## Configuration

The settings file holds these keys. A missing key takes the default shown
here.

```json
{
  "user_display_name": "User",
  "system_prompt": "",
  "xai_api_key": "placeholder",
  "claude_api_key": "placeholder",
  "openai_api_key": "placeholder",
  "provider": "xai",
  "model": "grok-3-beta",
  "store_chat_history": true,
  "theme_id": 0
}
```

The defaults for the three API keys are empty strings. If `model` is missing,
it defaults to `grok-3-beta` when the provider is `xai` and to `claude`
otherwise.

`provider` is one of `xai`, `claude` or `openai`. Each provider uses its own
key field. `termchat.providers.ProviderRegistry` lists the display names,
default models and known models of the providers. The system prompt is sent
as a leading system message to xAI and OpenAI, and as the `system` field to
Claude.

## Files written

- The settings file: saved on exit, as indented JSON with sorted keys.
- `chat_history.log`: a timestamped record of every message, every appended
  reply chunk and every completed reply.
- `chatbot.log`: the application log.

## Use as a library

The clients can be used without the interface:

```python
from termchat.clients.openai import OpenAIClient
from termchat.errors import ApiErrorInfo

client = OpenAIClient()
client.set_api_key("placeholder")
client.push_user_message("Hello")
try:
    reply = client.send_message(client.build_message_history(""), "")
except ApiErrorInfo as error:
    print(error.code.name, error.message)
else:
    client.push_assistant_message(reply)
```

`ClaudeAIClient` (`termchat.clients.claude`) and `XAIClient`
(`termchat.clients.xai`) work the same way. They share their configuration
and history methods with `termchat.clients.base.BaseAIClient`.
`send_message_stream` sends a request on a background thread and reports
the result through callbacks.

Other pieces can be used on their own:

- `termchat.config.ConfigManager` loads and saves `termchat.settings.Settings`.
  It raises `ConfigError` on failure.
- `termchat.textwrap_utf8` provides `display_width` and `word_wrap`. Widths
  are counted in terminal columns.
- `termchat.editor.CommandLineEditor` is the input line editor. It keeps a
  history of entries.
- `termchat.messages.MessageHandler` stores the conversation and is safe to
  use from several threads.
- `termchat.logger.RichLogger` writes log records as text or JSON lines.

## What it does not do

- The settings panel shows the current settings but cannot change them. To
  change a setting, edit the settings file while the program is not
  running.
- The provider is not shown in the settings panel.
- `theme_id` is stored, but no colour themes are applied.
- `store_chat_history` is stored but not consulted. `chat_history.log` is
  always written.
- Past conversations are not reloaded when the program starts.
- Replies are not streamed from the network. The xAI reply is fetched whole
  and then revealed piece by piece.
- The input history is recorded, but no key recalls it. Up and Down scroll
  the chat.

## Tests

```
pip install .[test]
pytest
```