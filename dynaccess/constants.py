MAX_BATCH_GET = 100
# keys per BatchGetItem request
# https://docs.aws.amazon.com/amazondynamodb/latest/APIReference/API_BatchGetItem.html

MAX_BATCH_WRITE = 25
# put/delete requests per BatchWriteItem request
# https://docs.aws.amazon.com/amazondynamodb/latest/APIReference/API_BatchWriteItem.html
