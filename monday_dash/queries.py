"""GraphQL documents sent to the monday.com API (API-Version 2023-04)."""

ME = """
query {
  me {
    id
    name
    email
  }
}
"""

# Board list for the dashboard: enough for user filtering, subitem nesting
# and date-column discovery.
BOARDS = """
query {
  boards(limit: 100) {
    id
    name
    description
    state
    board_kind
    workspace {
      id
      name
    }
    owners {
      id
      name
      email
    }
    subscribers {
      id
      name
      email
    }
    groups {
      id
      title
      color
    }
    columns {
      id
      title
      type
    }
    items_page(limit: 5) {
      items {
        id
        name
        state
      }
    }
  }
}
"""

BOARD_DETAIL = """
query ($boardId: ID!) {
  boards(ids: [$boardId]) {
    id
    name
    description
    state
    board_kind
    permissions
    groups {
      id
      title
      color
      items {
        id
        name
        state
        column_values {
          id
          text
          title
          type
          value
        }
      }
    }
    columns {
      id
      title
      type
      settings_str
    }
    owners {
      id
      name
      email
    }
    subscribers {
      id
      name
      email
    }
  }
}
"""

# Lighter board read used for date analysis.
BOARD_DATES = """
query ($boardId: ID!) {
  boards(ids: [$boardId]) {
    id
    name
    columns {
      id
      title
      type
      settings_str
    }
    items_page(limit: 10) {
      items {
        id
        name
        state
        column_values {
          id
          title
          type
          text
          value
        }
      }
    }
  }
}
"""

CREATE_BOARD = """
mutation ($boardName: String!, $boardKind: BoardKind, $description: String) {
  create_board(board_name: $boardName, board_kind: $boardKind, description: $description) {
    id
    name
    description
  }
}
"""

ITEMS = """
query {
  items(limit: 50) {
    id
    name
    state
    created_at
    updated_at
    board {
      id
      name
    }
    group {
      id
      title
    }
    column_values {
      id
      text
      title
      type
    }
    creator {
      id
      name
    }
    updates {
      id
      body
      created_at
    }
  }
}
"""

CREATE_ITEM = """
mutation ($boardId: ID!, $itemName: String!, $groupId: String) {
  create_item(board_id: $boardId, item_name: $itemName, group_id: $groupId) {
    id
    name
    state
    board {
      id
      name
    }
  }
}
"""

RENAME_ITEM = """
mutation ($itemId: ID!, $itemName: String!) {
  change_simple_column_value(item_id: $itemId, column_id: "name", value: $itemName) {
    id
    name
  }
}
"""

CHANGE_COLUMN_VALUES = """
mutation ($itemId: ID!, $columnValues: JSON!) {
  change_multiple_column_values(item_id: $itemId, column_values: $columnValues) {
    id
    name
    column_values {
      id
      text
      title
    }
  }
}
"""

USERS = """
query {
  users(limit: 50) {
    id
    name
    email
    title
    birthday
    country_code
    is_admin
    is_guest
    enabled
    created_at
    time_zone_identifier
    teams {
      id
      name
    }
  }
}
"""

TEAMS = """
query {
  teams(limit: 25) {
    id
    name
    picture_url
    users {
      id
      name
      email
    }
  }
}
"""

ACTIVITY_LOGS = """
query ($limit: Int) {
  activity_logs(limit: $limit) {
    id
    event
    created_at
    user_id
    account_id
    data
  }
}
"""

UPDATES = """
query {
  updates(limit: 50) {
    id
    body
    text_body
    created_at
    updated_at
    creator {
      id
      name
    }
    item {
      id
      name
      board {
        id
        name
      }
    }
    replies {
      id
      body
      created_at
      creator {
        id
        name
      }
    }
  }
}
"""

CREATE_UPDATE = """
mutation ($itemId: ID!, $body: String!) {
  create_update(item_id: $itemId, body: $body) {
    id
    body
    text_body
    created_at
    creator {
      id
      name
    }
  }
}
"""

WORKSPACE_STATS = """
query {
  boards(limit: 200) {
    id
    state
    board_kind
    items_page(limit: 25) {
      items {
        id
        state
      }
    }
  }
  users {
    id
    enabled
    is_admin
    is_guest
  }
  teams {
    id
  }
}
"""

SET_TIMELINE = """
mutation ($boardId: ID!, $itemId: ID!, $columnValues: JSON!) {
  change_multiple_column_values(board_id: $boardId, item_id: $itemId, column_values: $columnValues) {
    id
    name
    column_values {
      id
      title
      text
      type
    }
  }
}
"""

CREATE_COLUMN = """
mutation ($boardId: ID!, $columnType: ColumnType!, $title: String!, $description: String) {
  create_column(board_id: $boardId, column_type: $columnType, title: $title, description: $description) {
    id
    title
    type
    description
  }
}
"""
