from localdoc_sdk import CompletionClient

client = CompletionClient(model="llama3.1")
print(client.complete("How tall is Michael Jordan?"))
