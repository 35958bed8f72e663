"""GraphQL documents, one per backend operation.

Kept together so they are easy to audit against the live schema.  The
translation layer treats them as opaque text.
"""

from __future__ import annotations

# -- Issues ----------------------------------------------------------------

CREATE_ISSUE = """
mutation CreateIssue($input: IssueCreateInput!) {
  issueCreate(input: $input) {
    success
    issue {
      id
      identifier
      title
      url
      team { id name }
      project { id name }
    }
  }
}
"""

CREATE_BATCH_ISSUES = """
mutation CreateBatchIssues($input: IssueBatchCreateInput!) {
  issueBatchCreate(input: $input) {
    success
    issues {
      id
      identifier
      title
      url
    }
    lastSyncId
  }
}
"""

UPDATE_ISSUE = """
mutation UpdateIssue($id: String!, $input: IssueUpdateInput!) {
  issueUpdate(id: $id, input: $input) {
    success
    issue {
      id
      identifier
      title
      url
      state { name }
    }
  }
}
"""

UPDATE_ISSUES = """
mutation UpdateIssues($ids: [UUID!]!, $input: IssueUpdateInput!) {
  issueBatchUpdate(ids: $ids, input: $input) {
    success
    issues {
      id
      identifier
      title
      url
      state { name }
    }
  }
}
"""

DELETE_ISSUE = """
mutation DeleteIssue($id: String!) {
  issueDelete(id: $id) {
    success
  }
}
"""

DELETE_ISSUES = """
mutation DeleteIssues($ids: [String!]!) {
  issueDelete(ids: $ids) {
    success
  }
}
"""

SEARCH_ISSUES = """
query SearchIssues(
  $filter: IssueFilter
  $first: Int
  $after: String
  $orderBy: PaginationOrderBy
) {
  issues(filter: $filter, first: $first, after: $after, orderBy: $orderBy) {
    pageInfo { hasNextPage endCursor }
    nodes {
      id
      identifier
      title
      description
      url
      priority
      estimate
      createdAt
      updatedAt
      state { id name type color }
      assignee { id name email }
      team { id name key }
      project { id name }
      labels { nodes { id name color } }
    }
  }
}
"""

# -- Projects --------------------------------------------------------------

CREATE_PROJECT = """
mutation CreateProject($input: ProjectCreateInput!) {
  projectCreate(input: $input) {
    success
    project {
      id
      name
      url
    }
    lastSyncId
  }
}
"""

GET_PROJECT = """
query GetProject($id: String!) {
  project(id: $id) {
    id
    name
    description
    url
    state
    documentContent { content contentState }
    teams { nodes { id name key } }
    issues { nodes { id identifier title state { name } } }
    createdAt
    updatedAt
  }
}
"""

SEARCH_PROJECTS = """
query SearchProjects($filter: ProjectFilter) {
  projects(filter: $filter) {
    nodes {
      id
      name
      description
      url
      state
      documentContent { content contentState }
      teams { nodes { id name key } }
    }
  }
}
"""

# -- Project milestones ----------------------------------------------------

_MILESTONE_FIELDS = """
      id
      name
      description
      documentContent { content contentState }
      targetDate
      status
      progress
      sortOrder
      project { id name }
"""

CREATE_PROJECT_MILESTONE = f"""
mutation CreateProjectMilestone($input: ProjectMilestoneCreateInput!) {{
  projectMilestoneCreate(input: $input) {{
    success
    projectMilestone {{{_MILESTONE_FIELDS}      createdAt
      updatedAt
    }}
    lastSyncId
  }}
}}
"""

UPDATE_PROJECT_MILESTONE = f"""
mutation UpdateProjectMilestone($id: String!, $input: ProjectMilestoneUpdateInput!) {{
  projectMilestoneUpdate(id: $id, input: $input) {{
    success
    projectMilestone {{{_MILESTONE_FIELDS}      updatedAt
    }}
    lastSyncId
  }}
}}
"""

DELETE_PROJECT_MILESTONE = """
mutation DeleteProjectMilestone($id: String!) {
  projectMilestoneDelete(id: $id) {
    success
    lastSyncId
  }
}
"""

GET_PROJECT_MILESTONE = f"""
query GetProjectMilestone($id: String!) {{
  projectMilestone(id: $id) {{{_MILESTONE_FIELDS}      issues {{ nodes {{ id identifier title state {{ name }} }} }}
      createdAt
      updatedAt
  }}
}}
"""

SEARCH_PROJECT_MILESTONES = f"""
query SearchProjectMilestones(
  $filter: ProjectMilestoneFilter
  $first: Int
  $after: String
  $orderBy: PaginationOrderBy
) {{
  projectMilestones(filter: $filter, first: $first, after: $after, orderBy: $orderBy) {{
    pageInfo {{ hasNextPage endCursor }}
    nodes {{{_MILESTONE_FIELDS}      createdAt
      updatedAt
    }}
  }}
}}
"""

# -- Comments --------------------------------------------------------------

GET_ISSUE_COMMENTS = """
query GetIssueComments(
  $issueId: String!
  $first: Int
  $after: String
  $includeArchived: Boolean
) {
  issue(id: $issueId) {
    id
    identifier
    comments(first: $first, after: $after, includeArchived: $includeArchived) {
      pageInfo { hasNextPage endCursor }
      nodes {
        id
        body
        user { id name email }
        parent { id }
        children { nodes { id body user { id name } createdAt } }
        createdAt
        updatedAt
      }
    }
  }
}
"""

CREATE_COMMENT = """
mutation CreateComment($input: CommentCreateInput!) {
  commentCreate(input: $input) {
    success
    comment {
      id
      body
      user { id name email }
      issue { id title }
      parent { id body user { id name } }
      createdAt
      updatedAt
    }
    lastSyncId
  }
}
"""

# -- Teams, labels, users --------------------------------------------------

GET_TEAMS = """
query GetTeams {
  teams {
    nodes {
      id
      name
      key
      states { nodes { id name type color } }
      labels { nodes { id name color } }
    }
  }
}
"""

CREATE_ISSUE_LABELS = """
mutation CreateIssueLabels($labels: [IssueLabelCreateInput!]!) {
  issueLabelCreate(input: $labels) {
    success
    issueLabels {
      id
      name
      color
    }
  }
}
"""

GET_USER = """
query GetUser {
  viewer {
    id
    name
    email
    teams { nodes { id name key } }
  }
}
"""
