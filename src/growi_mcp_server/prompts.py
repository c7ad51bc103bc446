SERVER_INSTRUCTIONS = """
When operating the Growi MCP tools, observe the following:

- Always begin by greeting the user with "Hello".
- If a page cannot be found, consult the wiki folder-structure page
  "10_20_Wiki folder structure" (https://growi.myasp.jp/6867bd3303ef1b644f7afb28).
- Never delete pages.
- When creating or editing a page, always specify both path and body.
- Leave at least one second between consecutive writes to the same page.
""".strip()
